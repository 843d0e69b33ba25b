import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///number_master.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma separated list of frontend origins allowed by CORS and Socket.IO
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
        ).split(',') if o.strip()
    ]
    # Default page size for /api/leaderboard/top
    LEADERBOARD_TOP_LIMIT = int(os.environ.get('LEADERBOARD_TOP_LIMIT', '10'))
