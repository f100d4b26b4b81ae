"""Transaction extraction from Ecuadorian bank notification emails."""

__version__ = "0.1.0"


def __getattr__(name):
    # The CLI pulls in every service; only load it when asked for.
    if name == "main":
        from expensify.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
