import os


def _env_flag(name, default='0'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev')
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///career_insights.db'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Verify pooled connections before use; recycle hourly
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
    }

    # Bearer tokens issued by the identity provider
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', 'your-secret-key-change-in-production')
    JWT_ALGORITHMS = [
        alg.strip() for alg in os.environ.get('JWT_ALGORITHMS', 'HS256').split(',') if alg.strip()
    ]
    JWT_VERIFY_SIGNATURE = _env_flag('JWT_VERIFY_SIGNATURE', '1')

    # Text generation service
    INSIGHT_PROVIDER = os.environ.get('INSIGHT_PROVIDER', 'gemini')  # 'gemini', 'openai' or 'ollama'
    INSIGHT_MODEL = os.environ.get('INSIGHT_MODEL', '')  # empty -> provider default
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY', '')
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY', '')
    OLLAMA_URL = os.environ.get('OLLAMA_URL', 'http://localhost:11434')
    INSIGHT_TIMEOUT_SECONDS = float(os.environ.get('INSIGHT_TIMEOUT_SECONDS', '60'))
    INSIGHT_TEMPERATURE = float(os.environ.get('INSIGHT_TEMPERATURE', '0.7'))

    # Advisory refresh window stamped on every new insight
    INSIGHT_REFRESH_DAYS = int(os.environ.get('INSIGHT_REFRESH_DAYS', '7'))

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173'
        ).split(',')
        if origin.strip()
    ]

    DEBUG = _env_flag('FLASK_DEBUG')
    TESTING = _env_flag('FLASK_TESTING')

    if not DEBUG:
        PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'test-secret-key'
    JWT_VERIFY_SIGNATURE = True
    GEMINI_API_KEY = ''
    OPENAI_API_KEY = ''
    PREFERRED_URL_SCHEME = 'http'
