# tests/test_usuarios.py

from erp_rh import db
from erp_rh.models import Usuario


def test_listagem_exige_admin(test_client, user_headers):
    assert test_client.get('/api/usuarios/', headers=user_headers).status_code == 403


def test_admin_gerencia_usuarios(test_client, admin_headers):
    """
    GIVEN um administrador autenticado
    WHEN ele cria, edita e exclui um usuário
    THEN verifica se cada operação é refletida na base de dados
    """
    response = test_client.post('/api/usuarios/', headers=admin_headers,
                                json={'name': 'Gestor', 'email': 'gestor@test.com', 'password': 'senha123', 'role': 'admin'})
    assert response.status_code == 201
    usuario_id = response.get_json()['data']['id']

    response = test_client.get('/api/usuarios/', headers=admin_headers)
    assert response.get_json()['data']['totalItems'] == 2

    response = test_client.put(f'/api/usuarios/{usuario_id}', headers=admin_headers, json={'role': 'user', 'active': False})
    assert response.status_code == 200
    usuario = db.session.get(Usuario, usuario_id)
    assert usuario.role == 'user'
    assert usuario.active is False

    response = test_client.delete(f'/api/usuarios/{usuario_id}', headers=admin_headers)
    assert response.status_code == 200
    assert test_client.get(f'/api/usuarios/{usuario_id}', headers=admin_headers).status_code == 404


def test_funcao_invalida(test_client, admin_headers):
    response = test_client.post('/api/usuarios/', headers=admin_headers,
                                json={'name': 'X', 'email': 'x@test.com', 'password': 'senha123', 'role': 'super_admin'})
    assert response.status_code == 400


def test_perfil_e_troca_de_senha(test_client, common_user, user_headers):
    response = test_client.put('/api/usuarios/profile', headers=user_headers, json={'email': 'outro@test.com'})
    assert response.get_json()['data']['email'] == 'outro@test.com'

    response = test_client.put('/api/usuarios/change-password', headers=user_headers,
                               json={'currentPassword': 'errada', 'newPassword': 'novasenha'})
    assert response.status_code == 400

    response = test_client.put('/api/usuarios/change-password', headers=user_headers,
                               json={'currentPassword': 'senha123', 'newPassword': 'novasenha'})
    assert response.status_code == 200


def test_active_precisa_ser_booleano(test_client, admin_headers, common_user):
    """
    GIVEN um administrador autenticado
    WHEN ele envia active como texto ao criar ou editar um usuário
    THEN verifica se a resposta é 400 e nada é alterado
    """
    response = test_client.post('/api/usuarios/', headers=admin_headers, json={
        'name': 'Gestor', 'email': 'gestor@test.com', 'password': 'senha123', 'active': 'false'
    })
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Valor inválido para active'
    assert Usuario.query.filter_by(email='gestor@test.com').first() is None

    response = test_client.put(f'/api/usuarios/{common_user.id}', headers=admin_headers, json={'active': 'false'})
    assert response.status_code == 400
    assert db.session.get(Usuario, common_user.id).active is True
