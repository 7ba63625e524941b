"""Root conftest: registers the sequential-group ordering plugin."""

pytest_plugins = ["harness.ordering", "pytester"]
