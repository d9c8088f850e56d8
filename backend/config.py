import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///athlete_unknown.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma separated list of frontend origins allowed by CORS / Socket.IO
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000')
    # Scoring
    INITIAL_SCORE = int(os.environ.get('INITIAL_SCORE', '100'))
    INCORRECT_GUESS_PENALTY = int(os.environ.get('INCORRECT_GUESS_PENALTY', '2'))
    REGULAR_TILE_PENALTY = int(os.environ.get('REGULAR_TILE_PENALTY', '3'))
    PHOTO_TILE_PENALTY = int(os.environ.get('PHOTO_TILE_PENALTY', '6'))
    # Optional initials / nicknames tiles
    HINT_TILE_PENALTY = int(os.environ.get('HINT_TILE_PENALTY', '6'))
    # Max edit distance for a "close" guess
    CLOSE_GUESS_DISTANCE = int(os.environ.get('CLOSE_GUESS_DISTANCE', '4'))
    # Initials hint shows once the score drops below this
    HINT_THRESHOLD = int(os.environ.get('HINT_THRESHOLD', '70'))
    # Rank thresholds for correctly solved rounds
    RANK_AMAZING = int(os.environ.get('RANK_AMAZING', '95'))
    RANK_ELITE = int(os.environ.get('RANK_ELITE', '90'))
    RANK_SOLID = int(os.environ.get('RANK_SOLID', '80'))
