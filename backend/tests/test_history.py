import pytest

from athlete_unknown.services.games.history import (
    RoundHistoryEntry,
    find_entry,
    next_streak,
    parse_play_date,
    upsert_history,
)


def entry(play_date, score=90, correct=True):
    return RoundHistoryEntry(play_date=play_date, score=score, is_correct=correct, flipped_tiles=('bio',))


def test_upsert_appends_new_dates_in_order():
    history = []
    history = upsert_history(history, entry('2025-06-03'))
    history = upsert_history(history, entry('2025-06-01'))
    history = upsert_history(history, entry('2025-06-02'))
    assert [e.play_date for e in history] == ['2025-06-01', '2025-06-02', '2025-06-03']


def test_upsert_replaces_same_date():
    history = upsert_history([entry('2025-06-01', 80)], entry('2025-06-02'))
    history = upsert_history(history, entry('2025-06-01', 95))
    assert len(history) == 2
    assert find_entry(history, '2025-06-01').score == 95


def test_upsert_does_not_mutate_input():
    original = [entry('2025-06-01')]
    upsert_history(original, entry('2025-06-02'))
    assert len(original) == 1


def test_find_entry_missing_date():
    assert find_entry([entry('2025-06-01')], '2025-06-05') is None


def test_entry_wire_format():
    data = {'playDate': '2025-06-01T00:00:00Z', 'score': '88', 'isCorrect': True,
            'tilesFlipped': ['bio', 'photo'], 'incorrectGuesses': 2}
    parsed = RoundHistoryEntry.from_dict(data)
    assert parsed.play_date == '2025-06-01'
    assert parsed.score == 88
    assert parsed.flipped_tiles == ('bio', 'photo')
    assert parsed.to_dict() == {
        'playDate': '2025-06-01',
        'score': 88,
        'isCorrect': True,
        'tilesFlipped': ['bio', 'photo'],
        'incorrectGuesses': 2,
    }


@pytest.mark.parametrize('data', [
    {'playDate': '2025-06-01'},
    {'playDate': '2025-06-01', 'score': 'high'},
    {'playDate': '06/01/2025', 'score': 90},
    {'playDate': '2025-06-01', 'score': 90, 'tilesFlipped': 'bio'},
])
def test_entry_rejects_malformed_input(data):
    with pytest.raises(ValueError):
        RoundHistoryEntry.from_dict(data)


def test_parse_play_date():
    assert parse_play_date('2025-06-01').isoformat() == '2025-06-01'
    with pytest.raises(ValueError):
        parse_play_date('')


@pytest.mark.parametrize('streak,last,played,expected', [
    (0, None, '2025-06-01', (1, '2025-06-01')),
    (3, '2025-06-01', '2025-06-02', (4, '2025-06-02')),
    (3, '2025-06-01', '2025-06-01', (3, '2025-06-01')),
    (3, '2025-06-01', '2025-06-05', (1, '2025-06-05')),
    (3, '2025-06-05', '2025-05-30', (3, '2025-06-05')),
])
def test_next_streak(streak, last, played, expected):
    assert next_streak(streak, last, played) == expected
