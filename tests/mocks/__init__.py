"""
In-memory stand-ins for the browser driver.

The harness only needs a small slice of Playwright's page and locator
API. The fakes in this package implement that slice on top of a fake
clock, so wait and workflow behaviour can be tested instantly and
deterministically without a browser.
"""
