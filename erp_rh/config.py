# erp_rh/config.py

import os

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
INSTANCE_DIR = os.path.join(BASE_DIR, 'instance')


class Config:
    """Configurações base da aplicação."""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'chave_secreta_padrao_para_desenvolvimento')

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///' + os.path.join(INSTANCE_DIR, 'database.sqlite').replace('\\', '/')
    )

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    TESTING = False

    # Validade do token de acesso, em segundos (padrão: 30 dias)
    TOKEN_EXPIRATION = int(os.environ.get('TOKEN_EXPIRATION', 30 * 24 * 3600))

    # Validade do token de redefinição de senha, em minutos
    RESET_PASSWORD_EXPIRATION_MINUTES = 10

    # --- Uploads de fotos ---
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(INSTANCE_DIR, 'uploads'))
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Inclui detalhes do erro nas respostas 500 (apenas em desenvolvimento)
    EXPOSE_ERROR_DETAILS = os.environ.get('EXPOSE_ERROR_DETAILS', '0') == '1'

    # --- API de Email (Ex: SendGrid) ---
    MAIL_API_URL = os.environ.get('MAIL_API_URL', 'https://api.sendgrid.com/v3/mail/send')
    MAIL_API_KEY = os.environ.get('MAIL_API_KEY')
    MAIL_SENDER = os.environ.get('MAIL_SENDER')
    MAIL_SENDER_NAME = os.environ.get('MAIL_SENDER_NAME', 'ERP RH')


class DevelopmentConfig(Config):
    DEBUG = True
    EXPOSE_ERROR_DETAILS = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret-key-for-sessions'
    MAIL_API_KEY = None
    MAIL_SENDER = None
