import json

from athlete_unknown import db
from athlete_unknown.models import Round
from athlete_unknown.services.games.board import PlayerFact
from athlete_unknown.services.games.history import parse_play_date
from athlete_unknown.services.games.rules import SPORTS


def upsert_round(data):
    """Create or replace the round for ``data``'s sport and play date (caller commits)."""
    sport = data.get('sport')
    if sport not in SPORTS:
        raise ValueError(f"Unknown sport: {sport!r}")
    play_date = parse_play_date(data.get('playDate')).isoformat()
    player = PlayerFact.from_dict({**(data.get('player') or {}), 'sport': sport})
    if not player.name:
        raise ValueError('Round player must have a name')

    rnd = Round.query.filter_by(sport=sport, play_date=play_date).first()
    if rnd is None:
        rnd = Round(sport=sport, play_date=play_date)
    rnd.round_id = data.get('roundId') or f"{sport}-{play_date}"
    rnd.theme = data.get('theme')
    rnd.player = json.dumps(player.to_dict())
    db.session.add(rnd)
    return rnd


SAMPLE_ROUNDS = [
    {
        'roundId': 'baseball-1',
        'sport': 'baseball',
        'playDate': '2025-01-01',
        'player': {
            'name': 'Babe Ruth',
            'sportsReferenceURL': 'https://www.baseball-reference.com/players/r/ruthba01.shtml',
            'bio': 'Born February 6, 1895 in Baltimore, Maryland.',
            'playerInformation': 'Outfielder / Pitcher. Bats left, throws left.',
            'draftInformation': 'Signed by the Baltimore Orioles (International League) in 1914.',
            'yearsActive': '1914-1935',
            'teamsPlayedOn': 'BOS, NYY, BSN',
            'jerseyNumbers': '3',
            'careerStats': '714 HR, .342 BA, 182.6 WAR',
            'personalAchievements': '7x World Series champion, 1923 AL MVP',
            'photo': 'https://example.com/photos/ruthba01.jpg',
        },
    },
    {
        'roundId': 'basketball-1',
        'sport': 'basketball',
        'playDate': '2025-01-01',
        'player': {
            'name': 'Tim Duncan',
            'bio': 'Born April 25, 1976 in Christiansted, U.S. Virgin Islands.',
            'playerInformation': 'Power forward / Center. 6-11, 250 lb.',
            'draftInformation': '1997 NBA Draft, round 1, pick 1, San Antonio Spurs.',
            'yearsActive': '1997-2016',
            'teamsPlayedOn': 'SAS',
            'jerseyNumbers': '21',
            'careerStats': '19.0 PTS, 10.8 TRB, 206.4 WS',
            'personalAchievements': '5x NBA champion, 2x MVP, 15x All-Star',
            'photo': 'https://example.com/photos/duncati01.jpg',
        },
    },
    {
        'roundId': 'football-1',
        'sport': 'football',
        'playDate': '2025-01-01',
        'player': {
            'name': 'Jerry Rice',
            'bio': 'Born October 13, 1962 in Starkville, Mississippi.',
            'playerInformation': 'Wide receiver. 6-2, 200 lb.',
            'draftInformation': '1985 NFL Draft, round 1, pick 16, San Francisco 49ers.',
            'yearsActive': '1985-2004',
            'teamsPlayedOn': 'SFO, RAI, SEA',
            'jerseyNumbers': '80',
            'careerStats': '1,549 REC, 22,895 YDS, 197 TD',
            'personalAchievements': '3x Super Bowl champion, Super Bowl XXIII MVP',
            'photo': 'https://example.com/photos/riceje00.jpg',
        },
    },
]
