import pytest

from changelog_pr.config.loader import ENV_VARS


@pytest.fixture(autouse=True)
def isolate_ci_environment(monkeypatch):
    """Remove CI-provided inputs from the environment for each test.

    Tests running inside GitHub Actions would otherwise pick up the
    runner's own GITHUB_REF and GITHUB_API_URL.
    """
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    yield
