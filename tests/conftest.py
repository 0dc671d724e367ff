"""Pytest configuration for judgekit tests.

Sets a non-interactive matplotlib backend and disables plt.show() calls
to avoid warnings and GUI requirements in CI environments.
"""

import matplotlib


def pytest_configure() -> None:
    matplotlib.use("Agg", force=True)

    import matplotlib.pyplot as plt

    plt.show = lambda *args, **kwargs: None  # type: ignore[assignment]
