"""Tests for command normalization and classification."""

from shellprofiler.analyzer.classifier import (
    CommandClassifier,
    categorize_command,
    clean_history_line,
)


def test_clean_history_line_strips_whitespace():
    assert clean_history_line("   git status  \n") == "git status"


def test_clean_history_line_strips_zsh_metadata():
    assert clean_history_line(": 1700000000:0;docker ps -a") == "docker ps -a"


def test_clean_history_line_rejects_comments_and_blanks():
    assert clean_history_line("# just a note") == ""
    assert clean_history_line("    ") == ""
    assert clean_history_line(": 1700000000:0;") == ""


def test_categorize_development_system_file():
    assert categorize_command("git push") == frozenset({"development"})
    assert categorize_command("sudo apt update") == frozenset({"system"})
    assert categorize_command("mv a b") == frozenset({"file"})


def test_categorize_uncategorized_command():
    assert categorize_command("echo hello") == frozenset()


def test_categorize_evaluates_every_category():
    """Categorization is a union over rules, not first-match."""
    rules = {"vcs": ("git",), "short": ("gi",), "other": ("ls",)}

    assert categorize_command("git log", rules) == frozenset({"vcs", "short"})


class TestCommandClassifier:
    """Test tool and language detection."""

    def test_languages_by_name_or_package_manager(self):
        classifier = CommandClassifier(lambda tool: True, candidates=["python", "node", "go"])

        assert classifier.languages_in("python3 manage.py runserver") == ["python"]
        assert classifier.languages_in("pip install requests") == ["python"]
        assert classifier.languages_in("npm run build") == ["node"]
        assert classifier.languages_in("go get example.com/mod") == ["go"]

    def test_candidates_without_package_manager_need_their_name(self):
        classifier = CommandClassifier(lambda tool: True, candidates=["zsh", "git"])

        assert classifier.languages_in("echo hello") == []

    def test_prefixed_tools_require_installation(self):
        installed = {"git"}
        classifier = CommandClassifier(lambda tool: tool in installed)

        assert classifier.prefixed_tools("git commit", ["git", "docker"]) == ["git"]
        assert classifier.prefixed_tools("docker build .", ["git", "docker"]) == []


def test_categorize_with_custom_rules():
    rules = {"infra": ("terraform",)}

    assert categorize_command("terraform plan", rules) == frozenset({"infra"})
    assert categorize_command("git status", rules) == frozenset()
