import unittest
from pathlib import Path

from changelog_pr.config.loader import (
    DEFAULT_API_URL,
    ChangelogConfig,
    ConfigError,
    load_config,
    parse_branch_ref,
)


BASE_ENV = {
    "INPUT_OWNER": "octo",
    "INPUT_REPO": "manager",
    "INPUT_TOKEN": "secret-token",
    "GITHUB_REF": "refs/heads/develop",
}


class TestParseBranchRef(unittest.TestCase):
    def test_parse_branch_ref_cases(self) -> None:
        cases = [
            ("refs/heads/foo", "foo"),
            ("refs/heads/feature/login", "login"),
            ("main", "main"),
            ("  refs/heads/main\n", "main"),
        ]
        for ref, expected in cases:
            with self.subTest(ref=ref):
                self.assertEqual(parse_branch_ref(ref), expected)

    def test_parse_branch_ref_rejects_empty_segment(self) -> None:
        with self.assertRaises(ConfigError):
            parse_branch_ref("refs/heads/")


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def test_load_config_from_environment(self) -> None:
        config = load_config(BASE_ENV)
        self.assertIsInstance(config, ChangelogConfig)
        self.assertEqual(config.owner, "octo")
        self.assertEqual(config.repo, "manager")
        self.assertEqual(config.token, "secret-token")
        self.assertEqual(config.branch, "changelog/develop")
        self.assertEqual(config.base_branch, "main")
        self.assertEqual(config.output_path, Path("CHANGELOG.md"))
        self.assertEqual(config.api_url, DEFAULT_API_URL)
        self.assertFalse(config.include_other)

    def test_explicit_branch_wins_over_ref(self) -> None:
        env = dict(BASE_ENV, INPUT_BRANCH="docs/changelog")
        self.assertEqual(load_config(env).branch, "docs/changelog")

    def test_overrides_take_precedence(self) -> None:
        config = load_config(
            BASE_ENV,
            owner="someone",
            base_branch="trunk",
            output_path="docs/CHANGES.md",
            api_url="https://ghe.example.com/api/v3/",
            include_other=True,
            repo=None,
        )
        self.assertEqual(config.owner, "someone")
        self.assertEqual(config.repo, "manager")
        self.assertEqual(config.base_branch, "trunk")
        self.assertEqual(config.output_path, Path("docs/CHANGES.md"))
        self.assertEqual(config.api_url, "https://ghe.example.com/api/v3")
        self.assertTrue(config.include_other)

    def test_missing_required_keys(self) -> None:
        env = {"INPUT_OWNER": "octo", "INPUT_TOKEN": ""}
        with self.assertRaises(ConfigError) as ctx:
            load_config(env)
        message = str(ctx.exception)
        self.assertIn("repo (INPUT_REPO)", message)
        self.assertIn("token (INPUT_TOKEN)", message)
        self.assertNotIn("owner", message)

    def test_missing_branch_and_ref(self) -> None:
        env = {k: v for k, v in BASE_ENV.items() if k != "GITHUB_REF"}
        with self.assertRaises(ConfigError):
            load_config(env)

    def test_branch_not_required_when_not_publishing(self) -> None:
        env = {k: v for k, v in BASE_ENV.items() if k != "GITHUB_REF"}
        config = load_config(env, require_branch=False)
        self.assertIsNone(config.branch)

    def test_invalid_types(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(BASE_ENV, owner=42)
        with self.assertRaises(ConfigError):
            load_config(BASE_ENV, request_timeout="soon")

    def test_repr_hides_token(self) -> None:
        config = load_config(BASE_ENV)
        self.assertNotIn("secret-token", repr(config))


if __name__ == "__main__":
    unittest.main()
