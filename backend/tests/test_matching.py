import pytest

from athlete_unknown.services.games.matching import MatchKind, classify, levenshtein_distance, normalize


def test_normalize_drops_case_spacing_and_punctuation():
    assert normalize('  Babe Ruth ') == 'baberuth'
    assert normalize("A.J. O'Neil-Smith") == 'ajoneilsmith'
    assert normalize(None) == ''


@pytest.mark.parametrize('a,b,expected', [
    ('', '', 0),
    ('abc', '', 3),
    ('', 'abc', 3),
    ('kitten', 'sitting', 3),
    ('baberuth', 'baberut', 1),
    ('flaw', 'lawn', 2),
])
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


@pytest.mark.parametrize('name', ['Babe Ruth', 'Tim Duncan', "Shaquille O'Neal", 'x'])
def test_same_name_is_exact(name):
    assert classify(name, name) is MatchKind.EXACT


def test_exact_after_normalization():
    assert classify('  babe   RUTH', 'Babe Ruth') is MatchKind.EXACT
    assert classify('AJ Burnett', 'A.J. Burnett') is MatchKind.EXACT


def test_close_within_four_edits():
    assert classify('Babe Rut', 'Babe Ruth') is MatchKind.CLOSE
    assert classify('Bobe Rath', 'Babe Ruth') is MatchKind.CLOSE
    # four edits is still close, five is not
    assert classify('Baxx Rxxh', 'Babe Ruth') is MatchKind.CLOSE
    assert classify('Bxxx Rxxh', 'Babe Ruth') is MatchKind.WRONG


def test_custom_distance_threshold():
    assert classify('Babe Rxxx', 'Babe Ruth', max_distance=2) is MatchKind.WRONG
    assert classify('Babe Rxxh', 'Babe Ruth', max_distance=2) is MatchKind.CLOSE


def test_empty_and_garbage_guesses_are_wrong():
    assert classify('', 'Babe Ruth') is MatchKind.WRONG
    assert classify('   ', 'Ty Cobb') is MatchKind.WRONG
    assert classify('!!@@##', 'Babe Ruth') is MatchKind.WRONG
    assert classify(None, 'Babe Ruth') is MatchKind.WRONG


def test_empty_target_only_matches_empty_guess():
    assert classify('', '') is MatchKind.EXACT
    assert classify('Ty', '') is MatchKind.WRONG
