from treemirror.domain.crawl_task import TaskOutcome
from treemirror.domain.mirror_result import MirrorResult


def test_result_counts_actions():
    outcomes = [
        TaskOutcome.done("http://h/", "listed", removed=2, queued=3),
        TaskOutcome.done("http://h/a", "downloaded"),
        TaskOutcome.done("http://h/b", "linked", queued=1),
        TaskOutcome.done("http://h/c", "exists"),
        TaskOutcome.done("http://h/c", "visited"),
    ]
    result = MirrorResult.from_outcomes(outcomes)
    assert result.tasks == 5
    assert result.listed == 1
    assert result.downloaded == 1
    assert result.linked == 1
    assert result.removed == 2
    assert result.skipped == 2
    assert result.ok


def test_any_failure_makes_result_not_ok():
    outcomes = [
        TaskOutcome.done("http://h/", "listed"),
        TaskOutcome.failure("http://h/x", "URL http://h/x got 404"),
    ]
    result = MirrorResult.from_outcomes(outcomes)
    assert not result.ok
    assert result.failed == 1
    assert result.failures[0].url == "http://h/x"
    assert result.failures[0].error == "URL http://h/x got 404"
