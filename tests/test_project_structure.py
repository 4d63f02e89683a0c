"""Basic project scaffolding tests."""

import importlib


def test_package_importable() -> None:
    """Verify the top-level package is importable."""
    import navalbattle  # noqa: F401  (import used to ensure availability)

    assert navalbattle.__version__


def test_submodules_exist() -> None:
    modules = [
        "navalbattle.engine.geometry",
        "navalbattle.engine.grid",
        "navalbattle.engine.setup",
        "navalbattle.engine.bot",
        "navalbattle.engine.game",
        "navalbattle.engine.loop",
        "navalbattle.ui.terminal",
        "navalbattle.telemetry",
        "navalbattle.cli",
    ]

    for module in modules:
        assert importlib.import_module(module) is not None
