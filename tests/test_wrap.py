import pytest

from bookpress.render.wrap import iter_wrapped, wrap_text


PARAGRAPH = (
    "Hello world this is a very long paragraph that must wrap across multiple lines "
    "because it exceeds the usable content width of the page."
)


def test_lines_fit_width(metrics):
    lines = wrap_text(PARAGRAPH, "regular", 12, 120, metrics.measure)
    assert len(lines) > 1
    for line in lines:
        assert metrics.measure(line, "regular", 12) < 120


def test_words_preserved_in_order(metrics):
    text = "  alpha   beta\tgamma\n delta epsilon zeta eta theta  "
    lines = wrap_text(text, "regular", 12, 60, metrics.measure)
    assert " ".join(lines).split() == text.split()


def test_oversize_word_is_its_own_line(metrics):
    lines = wrap_text("a supercalifragilistic b", "regular", 10, 40, metrics.measure)
    assert lines == ["a", "supercalifragilistic", "b"]


def test_oversize_first_word_not_preceded_by_empty_line(metrics):
    lines = wrap_text("enormousword tail", "regular", 10, 20, metrics.measure)
    assert lines == ["enormousword", "tail"]
    assert "" not in lines


def test_exact_width_is_not_adopted(metrics):
    # "ab cd" is 5 chars * 5 = 25 wide; strict comparison rejects it at 25
    assert wrap_text("ab cd", "regular", 10, 25, metrics.measure) == ["ab", "cd"]
    assert wrap_text("ab cd", "regular", 10, 25.5, metrics.measure) == ["ab cd"]


def test_empty_and_whitespace_give_no_lines(metrics):
    assert wrap_text("", "regular", 12, 100, metrics.measure) == []
    assert wrap_text("   \t ", "regular", 12, 100, metrics.measure) == []


def test_iter_wrapped_restarts_on_each_call(metrics):
    first = list(iter_wrapped(PARAGRAPH, "regular", 12, 150, metrics.measure))
    second = list(iter_wrapped(PARAGRAPH, "regular", 12, 150, metrics.measure))
    assert first == second


def test_non_positive_width_rejected(metrics):
    with pytest.raises(ValueError):
        wrap_text("x", "regular", 12, 0, metrics.measure)
