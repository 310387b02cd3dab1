# erp_rh/responses.py

from datetime import date, datetime
from decimal import Decimal
from flask import jsonify, current_app, request
from flask.json.provider import DefaultJSONProvider
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException
from . import db


class ErrorResponse(Exception):
    """Erro operacional que vira um envelope JSON com o status informado."""

    def __init__(self, message='Erro interno do servidor', status_code=500, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def sucesso(data=None, message='Operação realizada com sucesso', status_code=200):
    return jsonify({'success': True, 'message': message, 'data': data}), status_code


def erro(message='Erro interno do servidor', status_code=500, details=None):
    body = {'success': False, 'message': message}
    if details is not None and current_app.config.get('EXPOSE_ERROR_DETAILS'):
        body['details'] = details
    return jsonify(body), status_code


def _default(o):
    if isinstance(o, datetime):
        return o.isoformat(timespec='seconds')
    if isinstance(o, date):
        return o.isoformat()
    if isinstance(o, Decimal):
        return float(o)
    return DefaultJSONProvider.default(o)


class JSONProvider(DefaultJSONProvider):
    """Serializa datas em ISO 8601 em vez do formato HTTP padrão do Flask."""
    default = staticmethod(_default)
    ensure_ascii = False
    sort_keys = False


def register_error_handlers(app):

    @app.errorhandler(ErrorResponse)
    def handle_error_response(e):
        # Descarta alterações pendentes da requisição que falhou
        db.session.rollback()
        if e.status_code >= 500:
            app.logger.error(f"Erro {e.status_code}: {e.message}")
        return erro(e.message, e.status_code, e.details)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        app.logger.warning(f"Violação de integridade: {e.orig}")
        return erro('Valor duplicado ou referência inválida', 400, str(e.orig))

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(e):
        db.session.rollback()
        app.logger.exception("Erro de acesso ao banco de dados")
        return erro('Erro interno do servidor', 500, str(e))

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        if e.code == 404:
            return erro(f'Rota não encontrada: {request.path}', 404)
        if e.code == 413:
            return erro('Arquivo muito grande', 413)
        return erro(e.description, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        app.logger.exception("Erro não tratado")
        return erro('Erro interno do servidor', 500, repr(e))
