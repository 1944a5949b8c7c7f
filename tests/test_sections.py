from gitfetch.display.achievements import derive_from_aggregates
from gitfetch.display.measure import strip_ansi
from gitfetch.display.measure import visible_width
from gitfetch.display.schemas import IssueSummary
from gitfetch.display.schemas import PullRequestSummary
from gitfetch.display.schemas import SummaryPayload
from gitfetch.display.sections import format_achievements
from gitfetch.display.sections import format_issues
from gitfetch.display.sections import format_languages
from gitfetch.display.sections import format_pull_requests
from gitfetch.display.sections import format_user_info
from gitfetch.display.sections import render_progress_bar


def test_user_info_lists_profile_fields() -> None:
    payload = SummaryPayload.model_validate(
        {
            "login": "octocat",
            "name": "Octo Cat",
            "bio": "line one\nline two",
            "blog": "https://github.blog",
            "total_stars": 7,
        }
    )

    lines = [strip_ansi(line) for line in format_user_info(payload, 12)]

    assert lines[0] == "Octo Cat - 12 contributions this year"
    assert lines[1] == "─" * len(lines[0])
    assert lines[2] == "Bio:         line one line two"
    assert lines[3] == "Website:     https://github.blog"
    assert lines[4] == "Stars:       7 ⭐"
    assert len(lines) == 5


def test_user_info_truncates_long_bio() -> None:
    payload = SummaryPayload(login="octocat", bio="x" * 200)

    bio_line = format_user_info(payload, 0)[2]

    assert visible_width(bio_line) == 12 + 1 + 80
    assert strip_ansi(bio_line).endswith("…")


def test_progress_bar_rounds_and_caps() -> None:
    assert strip_ansi(render_progress_bar(50.0, 24)) == "▰" * 12 + "▱" * 12
    assert strip_ansi(render_progress_bar(150.0, 4)) == "▰" * 4
    assert strip_ansi(render_progress_bar(-5.0, 4)) == "▱" * 4


def test_languages_ranked_and_limited() -> None:
    languages = {
        "Go": 5.0,
        "Jupyter Notebook": 40.0,
        "Python": 20.0,
        "Rust": 15.0,
        "C": 10.0,
        "Shell": 1.0,
    }

    lines = [strip_ansi(line) for line in format_languages(languages)]

    assert lines[0] == "TOP LANGUAGES"
    assert len(lines) == 2 + 5
    assert lines[2].startswith("Jupyter:")
    assert lines[2].endswith(" 40.0%")
    assert not any(line.startswith("Shell") for line in lines)
    assert format_languages({}) == []


def test_achievement_labels_are_aligned() -> None:
    lines = format_achievements(derive_from_aggregates(3, 10, 0))

    assert strip_ansi(lines[0]) == "ACHIEVEMENTS"
    values = [strip_ansi(line) for line in lines[2:]]
    assert values[0].endswith("  3 days")
    assert visible_width(values[0]) - len("3 days") == visible_width(values[1]) - len(
        "10 days"
    )
    assert format_achievements([]) == []


def test_pull_requests_section_limits_and_truncates() -> None:
    summary = PullRequestSummary.model_validate(
        {
            "awaiting_review": {
                "total_count": 9,
                "items": [
                    {
                        "title": "A very long pull request title here",
                        "repo": "org/repository-name",
                    },
                    {"title": "Second", "repo": ""},
                    {"title": "Third", "repo": "o/r"},
                    {"title": "Fourth", "repo": "o/r"},
                ],
            },
        }
    )

    lines = [strip_ansi(line) for line in format_pull_requests(summary)]

    assert lines[0] == "PULL REQUESTS"
    assert lines[2] == "Awaiting Review:  9"
    assert lines[3] == "  • A very long pull reques… (org/repository-…)"
    assert lines[4] == "  • Second"
    assert lines[5] == "  • Third (o/r)"
    assert lines[6] == "Your Open PRs:    0"
    assert lines[7] == "  • None"
    assert "Fourth" not in "\n".join(lines)


def test_issue_section_labels() -> None:
    lines = [strip_ansi(line) for line in format_issues(IssueSummary())]

    assert lines[0] == "ISSUES"
    assert [line.split(":")[0] for line in lines[2::2]] == [
        "Assigned",
        "Created (open)",
        "Mentions",
    ]


def test_missing_sections_render_nothing() -> None:
    assert format_pull_requests(None) == []
    assert format_issues(None) == []
