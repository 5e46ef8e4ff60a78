"""Runtime Config endpoint modules. Internal API, may change at any time."""
