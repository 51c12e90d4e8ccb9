import unittest

from changelog_pr.changelog.commit_classifier import Category
from changelog_pr.changelog.commit_model import Commit
from changelog_pr.changelog.renderer import (
    build_changelog,
    commit_prefix,
    format_entry,
    group_commits,
    strip_prefix,
)


def make_commit(message: str, sha: str = "a1b2c3d4e5f6", author: str = "Ada") -> Commit:
    return Commit(
        html_url=f"https://github.com/octo/manager/commit/{sha}",
        message=message,
        author_name=author,
    )


class TestEntryFormatting(unittest.TestCase):
    def test_commit_prefix(self) -> None:
        self.assertEqual(commit_prefix("feat: add login"), "feat")
        self.assertEqual(commit_prefix("fix(api): a: b"), "fix(api)")
        self.assertEqual(commit_prefix("no colon here"), "")

    def test_strip_prefix_cases(self) -> None:
        cases = [
            ("feat: add login", "add login"),
            ("fix:   spaced out  ", "spaced out"),
            ("fix(api): keep: second colon", "keep: second colon"),
            ("  update readme  ", "update readme"),
            (":leading colon", "leading colon"),
        ]
        for message, expected in cases:
            with self.subTest(message=message):
                self.assertEqual(strip_prefix(message), expected)

    def test_format_entry(self) -> None:
        commit = make_commit("feat: add login", sha="0123456789abcdef")
        self.assertEqual(
            format_entry(commit),
            "- ([0123456](https://github.com/octo/manager/commit/0123456789abcdef))"
            " - <Ada> - add login",
        )


class TestGroupCommits(unittest.TestCase):
    def test_groups_preserve_order_and_drop_chores(self) -> None:
        commits = [
            make_commit("feat: first", sha="1111111aaa"),
            make_commit("chore: bump deps", sha="2222222bbb"),
            make_commit("feat: second", sha="3333333ccc"),
            make_commit("update readme", sha="4444444ddd"),
            make_commit("config: tune", sha="5555555eee"),
        ]
        groups = group_commits(commits)
        self.assertEqual(
            set(groups), {Category.FEATURE, Category.FIX, Category.CONFIGURATION, Category.OTHER}
        )
        self.assertEqual(len(groups[Category.FEATURE]), 2)
        self.assertTrue(groups[Category.FEATURE][0].endswith("first"))
        self.assertTrue(groups[Category.FEATURE][1].endswith("second"))
        self.assertEqual(groups[Category.FIX], [])
        self.assertEqual(len(groups[Category.OTHER]), 1)
        self.assertFalse(any("2222222" in line for lines in groups.values() for line in lines))


class TestBuildChangelog(unittest.TestCase):
    def test_example_scenario(self) -> None:
        commits = [
            make_commit("feat: add login", sha="aaaaaaa111"),
            make_commit("fix: null pointer", sha="bbbbbbb222"),
            make_commit("chore: bump deps", sha="ccccccc333"),
            make_commit("update readme", sha="ddddddd444"),
        ]
        document = build_changelog(commits, "octo", "manager")
        expected = (
            "# manager\n"
            "##### by octo\n"
            "### Features\n\n"
            "- ([aaaaaaa](https://github.com/octo/manager/commit/aaaaaaa111)) - <Ada> - add login\n\n"
            "### Issues\n\n"
            "- ([bbbbbbb](https://github.com/octo/manager/commit/bbbbbbb222)) - <Ada> - null pointer\n\n"
        )
        self.assertEqual(document, expected)
        self.assertNotIn("### Configurations", document)
        self.assertNotIn("bump deps", document)
        self.assertNotIn("update readme", document)

    def test_section_order_is_fixed(self) -> None:
        commits = [
            make_commit("fix: one"),
            make_commit("config: two"),
            make_commit("feat: three"),
        ]
        document = build_changelog(commits, "octo", "manager")
        features = document.index("### Features")
        configurations = document.index("### Configurations")
        issues = document.index("### Issues")
        self.assertLess(features, configurations)
        self.assertLess(configurations, issues)

    def test_lines_within_section_joined_in_input_order(self) -> None:
        commits = [make_commit("fix: b", sha="b000000"), make_commit("fix: a", sha="a000000")]
        document = build_changelog(commits, "octo", "manager")
        self.assertIn(
            "### Issues\n\n"
            "- ([b000000](https://github.com/octo/manager/commit/b000000)) - <Ada> - b\n"
            "- ([a000000](https://github.com/octo/manager/commit/a000000)) - <Ada> - a\n\n",
            document,
        )

    def test_no_commits_renders_header_only(self) -> None:
        self.assertEqual(build_changelog([], "octo", "manager"), "# manager\n##### by octo\n")

    def test_only_chores_renders_header_only(self) -> None:
        document = build_changelog([make_commit("chore: x")], "octo", "manager")
        self.assertEqual(document, "# manager\n##### by octo\n")

    def test_include_other_adds_section_last(self) -> None:
        commits = [make_commit("update readme"), make_commit("feat: new")]
        without = build_changelog(commits, "octo", "manager")
        with_other = build_changelog(commits, "octo", "manager", include_other=True)
        self.assertNotIn("### Other Changes", without)
        self.assertTrue(with_other.startswith(without))
        self.assertTrue(with_other.endswith("<Ada> - update readme\n\n"))

    def test_build_is_deterministic(self) -> None:
        commits = [make_commit("feat: a"), make_commit("fix: b"), make_commit("config: c")]
        self.assertEqual(
            build_changelog(commits, "octo", "manager"),
            build_changelog(list(commits), "octo", "manager"),
        )


if __name__ == "__main__":
    unittest.main()
