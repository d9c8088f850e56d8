from dataclasses import replace

from athlete_unknown.services.games.board import (
    PlayerFact,
    RoundSession,
    Signal,
    flip_tile,
    give_up,
    new_session,
    round_number,
    share_text,
    submit_guess,
)
from athlete_unknown.services.games.rules import GameRules, HINT_TILE_KEYS, TILE_KEYS


def test_new_session_has_one_tile_per_fact_in_canonical_order(babe_ruth):
    session = new_session(babe_ruth)
    assert session.score == 100
    assert [t.key for t in session.tiles] == list(TILE_KEYS)
    assert session.tile('photo').penalty == 6
    assert all(t.penalty == 3 for t in session.tiles if t.key != 'photo')
    assert not session.terminal


def test_empty_fact_is_not_a_tile():
    fact = PlayerFact(sport='baseball', name='Ty Cobb', bio='Georgia Peach', photo='  ')
    session = new_session(fact)
    assert [t.key for t in session.tiles] == ['bio']
    assert flip_tile(session, 'photo') is session
    assert flip_tile(session, 'careerStats') is session


def test_text_flip_and_wrong_guess_leave_95(babe_ruth):
    session = new_session(babe_ruth)
    session = flip_tile(session, 'bio')
    assert session.score == 97
    session = submit_guess(session, 'Lou Gehrig')
    assert session.score == 95
    assert session.wrong_guess_count == 1
    assert session.signal is Signal.WRONG


def test_photo_flip_costs_six(babe_ruth):
    session = flip_tile(new_session(babe_ruth), 'photo')
    assert session.score == 94
    assert session.flip_count == 1


def test_flip_is_idempotent(babe_ruth):
    once = flip_tile(new_session(babe_ruth), 'careerStats')
    twice = flip_tile(once, 'careerStats')
    assert twice is once
    assert twice.score == 97
    assert twice.flip_count == 1


def test_flip_tracks_first_and_last(babe_ruth):
    session = new_session(babe_ruth)
    assert session.first_flipped is None
    session = flip_tile(session, 'yearsActive')
    assert session.first_flipped == session.last_flipped == 'yearsActive'
    session = flip_tile(session, 'photo')
    session = flip_tile(session, 'bio')
    assert session.first_flipped == 'yearsActive'
    assert session.last_flipped == 'bio'
    assert session.flip_order == ('yearsActive', 'photo', 'bio')


def test_operations_return_new_values(babe_ruth):
    start = new_session(babe_ruth)
    flipped = flip_tile(start, 'bio')
    assert start.score == 100
    assert not start.tile('bio').flipped
    assert flipped.tile('bio').flipped


def test_exact_guess_ends_round_without_penalty(babe_ruth):
    session = flip_tile(new_session(babe_ruth), 'bio')
    session = submit_guess(session, 'babe ruth')
    assert session.terminal
    assert session.correct
    assert not session.gave_up
    assert session.score == 97
    assert session.wrong_guess_count == 0
    assert session.signal is Signal.CORRECT


def test_first_close_guess_signals_close(babe_ruth):
    session = submit_guess(new_session(babe_ruth), 'Babe Rut')
    assert session.signal is Signal.CLOSE
    assert session.revealed_name is None
    assert session.score == 98
    assert session.wrong_guess_count == 1
    assert not session.terminal


def test_second_different_close_guess_reveals_name(babe_ruth):
    session = submit_guess(new_session(babe_ruth), 'Babe Rut')
    session = submit_guess(session, 'Babe Roth')
    assert session.signal is Signal.REVEAL
    assert session.revealed_name == 'Babe Ruth'
    assert not session.terminal
    assert session.score == 96
    assert session.wrong_guess_count == 2
    # typing the revealed name still has to happen to win
    session = submit_guess(session, session.revealed_name)
    assert session.correct and session.terminal
    assert session.score == 96


def test_repeating_the_same_close_guess_is_ignored(babe_ruth):
    first = submit_guess(new_session(babe_ruth), 'Babe Rut')
    again = submit_guess(first, ' babe rut ')
    assert again is first
    assert again.signal is Signal.CLOSE
    assert again.revealed_name is None
    assert again.score == 98
    assert again.wrong_guess_count == 1


def test_repeating_the_same_wrong_guess_charges_once(babe_ruth):
    first = submit_guess(new_session(babe_ruth), 'Lou Gehrig')
    again = submit_guess(first, 'lou gehrig')
    assert again is first
    assert again.score == 98
    assert again.wrong_guess_count == 1

    # only consecutive repeats are ignored
    session = submit_guess(first, 'Ty Cobb')
    session = submit_guess(session, 'Lou Gehrig')
    assert session.score == 94
    assert session.wrong_guess_count == 3


def test_close_guess_after_a_miss_still_reveals(babe_ruth):
    session = submit_guess(new_session(babe_ruth), 'Babe Rut')
    session = submit_guess(session, 'Lou Gehrig')
    session = submit_guess(session, 'Babe Rut')
    assert session.signal is Signal.CLOSE
    session = submit_guess(session, 'Babe Roth')
    assert session.signal is Signal.REVEAL


def test_blank_guess_is_a_wrong_guess(babe_ruth):
    session = submit_guess(new_session(babe_ruth), '   ')
    assert session.signal is Signal.WRONG
    assert session.score == 98
    assert not session.terminal


def test_give_up_freezes_session(babe_ruth):
    session = flip_tile(new_session(babe_ruth), 'photo')
    session = give_up(session)
    assert session.terminal and session.gave_up and not session.correct
    assert session.score == 94
    assert session.signal is Signal.GAVE_UP


def test_terminal_session_ignores_everything(babe_ruth):
    done = submit_guess(new_session(babe_ruth), 'Babe Ruth')
    assert flip_tile(done, 'photo') is done
    assert submit_guess(done, 'Lou Gehrig') is done
    assert give_up(done) is done

    surrendered = give_up(new_session(babe_ruth))
    assert submit_guess(surrendered, 'Babe Ruth') is surrendered
    assert not surrendered.correct


def test_score_never_increases(babe_ruth):
    session = new_session(babe_ruth)
    events = [
        lambda s: flip_tile(s, 'bio'),
        lambda s: submit_guess(s, 'Hank Aaron'),
        lambda s: flip_tile(s, 'bio'),
        lambda s: submit_guess(s, 'Babe Rut'),
        lambda s: flip_tile(s, 'photo'),
        lambda s: submit_guess(s, 'Bade Rutt'),
        lambda s: flip_tile(s, 'not-a-tile'),
        lambda s: give_up(s),
        lambda s: flip_tile(s, 'careerStats'),
    ]
    previous = session.score
    for event in events:
        session = event(session)
        assert session.score <= previous
        previous = session.score


def test_score_floors_at_zero(babe_ruth):
    session = new_session(babe_ruth, GameRules(initial_score=5))
    session = flip_tile(session, 'photo')
    assert session.score == 0
    assert submit_guess(session, 'Nobody').score == 0


def test_custom_rules_drive_penalties(babe_ruth):
    rules = GameRules(incorrect_guess_penalty=1, regular_tile_penalty=4, photo_tile_penalty=8)
    session = new_session(babe_ruth, rules)
    session = flip_tile(session, 'photo')
    session = flip_tile(session, 'bio')
    session = submit_guess(session, 'Ted Williams', rules)
    assert session.score == 100 - 8 - 4 - 1


def test_session_serialization_keeps_state(babe_ruth):
    session = submit_guess(flip_tile(new_session(babe_ruth), 'photo'), 'Babe Rut')
    restored = RoundSession.from_dict(session.to_dict())
    assert restored == session


def test_share_text_grid(babe_ruth):
    session = flip_tile(flip_tile(new_session(babe_ruth), 'bio'), 'photo')
    session = submit_guess(session, 'Babe Ruth')
    text = share_text(session, 'baseball-12')
    assert text.splitlines() == [
        'Athlete Unknown baseball #12',
        '\U0001f7e8\U0001f7e6\U0001f7e6',
        '\U0001f7e6\U0001f7e6\U0001f7e6',
        '\U0001f7e6\U0001f7e6\U0001f7e8',
        'Score: 91',
    ]


def test_round_number_defaults_to_one():
    assert round_number('football-7') == 7
    assert round_number('no-digits') == 1
    assert round_number(None) == 1


def test_hint_tiles_only_when_the_round_supplies_them(babe_ruth):
    assert all(t.key in TILE_KEYS for t in new_session(babe_ruth).tiles)

    fact = replace(babe_ruth, initials='G.H.R.', nicknames='The Bambino, The Sultan of Swat')
    session = new_session(fact)
    assert [t.key for t in session.tiles] == list(HINT_TILE_KEYS) + list(TILE_KEYS)
    assert session.tile('initials').penalty == 6
    assert session.tile('nicknames').penalty == 6


def test_hint_tile_flip_costs_points_but_stays_off_the_grid(babe_ruth):
    fact = PlayerFact.from_dict({**babe_ruth.to_dict(), 'nicknames': ['The Bambino', 'The Babe']})
    assert fact.content('nicknames') == 'The Bambino, The Babe'
    session = flip_tile(new_session(fact), 'nicknames')
    session = flip_tile(session, 'bio')
    assert session.score == 91
    assert session.flip_order == ('nicknames', 'bio')
    assert session.grid_flip_order == ('bio',)

    grid = share_text(session, 'baseball-12').splitlines()[1:4]
    assert grid[0] == '\U0001f7e8\U0001f7e6\U0001f7e6'


def test_hint_tile_penalty_follows_rules(babe_ruth):
    rules = GameRules(hint_tile_penalty=10)
    session = new_session(replace(babe_ruth, initials='G.H.R.'), rules)
    assert flip_tile(session, 'initials').score == 90
