# erp_rh/management.py

from flask import Blueprint, request
from flask_login import login_required, current_user
from .models import db, Usuario
from .decorators import admin_required
from .responses import ErrorResponse, sucesso
from .auth import validar_senha

bp = Blueprint('usuarios', __name__, url_prefix='/api/usuarios')

ROLES = ('user', 'admin')


def _buscar_usuario(id):
    usuario = db.session.get(Usuario, id)
    if usuario is None:
        raise ErrorResponse('Usuário não encontrado', 404)
    return usuario


def _email_em_uso(email, ignorar_id=None):
    existente = Usuario.query.filter_by(email=email).first()
    return existente is not None and existente.id != ignorar_id


def _validar_active(data):
    # JSON booleano; strings como "false" não são aceitas
    if 'active' in data and not isinstance(data['active'], bool):
        raise ErrorResponse('Valor inválido para active', 400)


# --- Perfil do usuário logado ---

@bp.route('/profile', methods=['PUT'])
@login_required
def atualizar_perfil():
    data = request.get_json(silent=True) or {}
    email = data.get('email')
    if email and _email_em_uso(email, current_user.id):
        raise ErrorResponse('E-mail já cadastrado', 400)

    if data.get('name'):
        current_user.name = data['name']
    if email:
        current_user.email = email
    db.session.commit()
    return sucesso(current_user.to_dict(), 'Perfil atualizado com sucesso')


@bp.route('/change-password', methods=['PUT'])
@login_required
def alterar_senha():
    data = request.get_json(silent=True) or {}
    if not current_user.check_password(data.get('currentPassword')):
        raise ErrorResponse('Senha atual incorreta', 400)
    validar_senha(data.get('newPassword'))

    current_user.set_password(data['newPassword'])
    db.session.commit()
    return sucesso(None, 'Senha alterada com sucesso')


# --- Administração de usuários ---

@bp.route('/')
@login_required
@admin_required
def listar_usuarios():
    usuarios = Usuario.query.order_by(Usuario.name).all()
    return sucesso({
        'items': [u.to_dict() for u in usuarios],
        'totalItems': len(usuarios),
        'totalPages': 1,
        'currentPage': 1
    })


@bp.route('/<int:id>')
@login_required
@admin_required
def ver_usuario(id):
    return sucesso(_buscar_usuario(id).to_dict())


@bp.route('/', methods=['POST'])
@login_required
@admin_required
def novo_usuario():
    data = request.get_json(silent=True) or {}
    name = data.get('name')
    email = data.get('email')
    password = data.get('password')
    role = data.get('role', 'user')

    if not all([name, email, password]):
        raise ErrorResponse('Nome, e-mail e senha são obrigatórios', 400)
    if role not in ROLES:
        raise ErrorResponse('Função inválida', 400, {'roles_validas': list(ROLES)})
    _validar_active(data)
    validar_senha(password)
    if _email_em_uso(email):
        raise ErrorResponse('E-mail já cadastrado', 400)

    usuario = Usuario(name=name, email=email, role=role, active=data.get('active', True))
    usuario.set_password(password)
    db.session.add(usuario)
    db.session.commit()
    return sucesso(usuario.to_dict(), 'Usuário criado com sucesso', 201)


@bp.route('/<int:id>', methods=['PUT'])
@login_required
@admin_required
def editar_usuario(id):
    usuario = _buscar_usuario(id)
    data = request.get_json(silent=True) or {}

    if 'role' in data and data['role'] not in ROLES:
        raise ErrorResponse('Função inválida', 400, {'roles_validas': list(ROLES)})
    _validar_active(data)
    if data.get('email') and _email_em_uso(data['email'], usuario.id):
        raise ErrorResponse('E-mail já cadastrado', 400)

    for campo in ('name', 'email', 'role', 'active'):
        if campo in data:
            setattr(usuario, campo, data[campo])
    if data.get('password'):
        validar_senha(data['password'])
        usuario.set_password(data['password'])

    db.session.commit()
    return sucesso(usuario.to_dict(), 'Usuário atualizado com sucesso')


@bp.route('/<int:id>', methods=['DELETE'])
@login_required
@admin_required
def excluir_usuario(id):
    usuario = _buscar_usuario(id)
    db.session.delete(usuario)
    db.session.commit()
    return sucesso(None, 'Usuário deletado com sucesso')
