# erp_rh/models.py

from . import db
from datetime import datetime, timedelta, timezone
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
import hashlib
import secrets


def agora_utc():
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Classe base para adicionar campos de timestamp automaticamente
class BaseModel(db.Model):
    __abstract__ = True
    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=agora_utc)
    updated_at = db.Column(db.DateTime, default=agora_utc, onupdate=agora_utc)


class Usuario(UserMixin, BaseModel):
    __tablename__ = 'users'
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    role = db.Column(db.String(20), nullable=False, default='user')
    password_hash = db.Column(db.String(255), nullable=False)
    reset_password_token = db.Column(db.String(64), nullable=True, index=True)
    reset_password_expire = db.Column(db.DateTime, nullable=True)
    active = db.Column(db.Boolean, nullable=False, default=True)

    @property
    def is_active(self):
        return bool(self.active)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method='scrypt')

    def check_password(self, password):
        if not password:
            return False
        return check_password_hash(self.password_hash, password)

    def generate_reset_token(self, minutos=10):
        """Gera o token de redefinição; só o hash SHA-256 fica gravado."""
        token = secrets.token_hex(20)
        self.reset_password_token = hash_reset_token(token)
        self.reset_password_expire = agora_utc() + timedelta(minutes=minutos)
        return token

    def clear_reset_token(self):
        self.reset_password_token = None
        self.reset_password_expire = None

    def to_dict(self):
        # Senha e token de redefinição nunca saem daqui
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'active': self.active,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


def hash_reset_token(token):
    return hashlib.sha256(token.encode('utf-8')).hexdigest()
