"""Root conftest: loaded before any test module imports postcraft.cli."""

import os

# Rich decides on colour when the module-level Console objects are created.
# CI runners often export FORCE_COLOR, which would put ANSI codes into the
# captured CLI output and break the JSON and HTML assertions.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"
