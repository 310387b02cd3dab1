# erp_rh/__init__.py

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from .config import Config
import os

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()


def create_app(config_class=Config):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Garante que o diretório de uploads exista
    upload_folder = app.config.get('UPLOAD_FOLDER') or os.path.join(app.instance_path, 'uploads')
    app.config['UPLOAD_FOLDER'] = upload_folder
    os.makedirs(os.path.join(upload_folder, 'fotos'), exist_ok=True)

    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    from .responses import JSONProvider, register_error_handlers
    app.json = JSONProvider(app)

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    # Autenticação por token (Authorization: Bearer ...)
    from .auth import load_user_from_request, unauthorized
    login_manager.request_loader(load_user_from_request)
    login_manager.unauthorized_handler(unauthorized)

    register_error_handlers(app)

    # --- Registrar Blueprints ---
    from . import auth
    app.register_blueprint(auth.bp)

    from . import management
    app.register_blueprint(management.bp)

    from .rh import routes as rh_routes
    app.register_blueprint(rh_routes.servidores)
    # Alias mantido para compatibilidade com o frontend antigo
    app.register_blueprint(rh_routes.servidores, url_prefix='/api/funcionarios', name='funcionarios')
    app.register_blueprint(rh_routes.enderecos)

    from .rh import ferias
    app.register_blueprint(ferias.bp)

    from .rh import aniversariantes
    app.register_blueprint(aniversariantes.bp)

    from .rh import relatorios_routes
    app.register_blueprint(relatorios_routes.bp)

    from . import api
    app.register_blueprint(api.bp)
    app.register_blueprint(api.uploads)

    # Comandos de linha (flask popular-demo)
    from .utils import register_commands
    register_commands(app)

    return app
