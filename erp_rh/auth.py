# erp_rh/auth.py

from flask import Blueprint, request, current_app
from flask_login import login_required, current_user
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from .models import db, Usuario, hash_reset_token, agora_utc
from .responses import ErrorResponse, sucesso, erro
from .services import enviar_email_redefinicao

bp = Blueprint('auth', __name__, url_prefix='/api/auth')

TOKEN_SALT = 'auth-token'
SENHA_MINIMA = 6


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def gerar_token(usuario):
    return _serializer().dumps({'id': usuario.id})


def load_user_from_request(req):
    """Carrega o usuário a partir do cabeçalho 'Authorization: Bearer <token>'."""
    header = req.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    token = header[len('Bearer '):].strip()
    try:
        dados = _serializer().loads(token, max_age=current_app.config['TOKEN_EXPIRATION'])
    except SignatureExpired:
        return None
    except BadSignature:
        return None
    usuario = db.session.get(Usuario, dados.get('id'))
    if usuario is None or not usuario.is_active:
        return None
    return usuario


def unauthorized():
    return erro('Não autorizado. Faça login para acessar.', 401)


def validar_senha(senha):
    if not senha or len(senha) < SENHA_MINIMA:
        raise ErrorResponse(f'A senha deve ter pelo menos {SENHA_MINIMA} caracteres', 400)


@bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    name = data.get('name')
    email = data.get('email')
    password = data.get('password')

    if not all([name, email, password]):
        raise ErrorResponse('Nome, e-mail e senha são obrigatórios', 400)
    validar_senha(password)

    if Usuario.query.filter_by(email=email).first():
        raise ErrorResponse('E-mail já cadastrado', 400)

    # Cadastro público sempre cria usuário comum
    usuario = Usuario(name=name, email=email, role='user')
    usuario.set_password(password)
    db.session.add(usuario)
    db.session.commit()

    return sucesso({'token': gerar_token(usuario), 'user': usuario.to_dict()},
                   'Usuário registrado com sucesso', 201)


@bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    email = data.get('email')
    password = data.get('password')

    if not email or not password:
        raise ErrorResponse('Por favor, informe e-mail e senha', 400)

    usuario = Usuario.query.filter_by(email=email).first()
    if usuario is None or not usuario.check_password(password):
        raise ErrorResponse('Credenciais inválidas', 401)
    if not usuario.is_active:
        raise ErrorResponse('Usuário inativo', 401)

    return sucesso({'token': gerar_token(usuario), 'user': usuario.to_dict()}, 'Login realizado com sucesso')


@bp.route('/me')
@login_required
def me():
    return sucesso(current_user.to_dict())


@bp.route('/updatedetails', methods=['PUT'])
@login_required
def update_details():
    data = request.get_json(silent=True) or {}
    email = data.get('email')
    if email and email != current_user.email and Usuario.query.filter_by(email=email).first():
        raise ErrorResponse('E-mail já cadastrado', 400)

    if data.get('name'):
        current_user.name = data['name']
    if email:
        current_user.email = email
    db.session.commit()
    return sucesso(current_user.to_dict(), 'Perfil atualizado com sucesso')


@bp.route('/updatepassword', methods=['PUT'])
@login_required
def update_password():
    data = request.get_json(silent=True) or {}
    if not current_user.check_password(data.get('currentPassword')):
        raise ErrorResponse('Senha atual incorreta', 401)
    validar_senha(data.get('newPassword'))

    current_user.set_password(data['newPassword'])
    db.session.commit()
    return sucesso(None, 'Senha atualizada com sucesso')


@bp.route('/forgotpassword', methods=['POST'])
def forgot_password():
    data = request.get_json(silent=True) or {}
    usuario = Usuario.query.filter_by(email=data.get('email')).first()
    if usuario is None:
        raise ErrorResponse('Não há usuário com esse e-mail', 404)

    token = usuario.generate_reset_token(current_app.config['RESET_PASSWORD_EXPIRATION_MINUTES'])
    db.session.commit()

    reset_url = f"{request.host_url.rstrip('/')}/api/auth/resetpassword/{token}"
    enviado = enviar_email_redefinicao(usuario, reset_url)

    # O token só volta na resposta fora de produção
    payload = {'emailEnviado': enviado}
    if current_app.debug or current_app.testing:
        payload['token'] = token
    return sucesso(payload, 'E-mail com as instruções para redefinição de senha enviado com sucesso')


@bp.route('/resetpassword/<token>', methods=['PUT'])
def reset_password(token):
    data = request.get_json(silent=True) or {}
    usuario = Usuario.query.filter(
        Usuario.reset_password_token == hash_reset_token(token),
        Usuario.reset_password_expire > agora_utc()
    ).first()
    if usuario is None:
        raise ErrorResponse('Token inválido ou expirado', 400)
    validar_senha(data.get('password'))

    usuario.set_password(data['password'])
    usuario.clear_reset_token()
    db.session.commit()
    return sucesso({'token': gerar_token(usuario)}, 'Senha redefinida com sucesso')
