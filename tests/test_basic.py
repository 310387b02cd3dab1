# tests/test_basic.py

from unittest import mock
from sqlalchemy.exc import SQLAlchemyError
from erp_rh import db


def test_health_check(test_client):
    """
    GIVEN um cliente Flask configurado para teste
    WHEN a rota de verificação ('/api/test') é requisitada sem login
    THEN verifica se a API responde com sucesso e um timestamp
    """
    response = test_client.get('/api/test')
    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert 'timestamp' in body


def test_rota_inexistente_devolve_json(test_client):
    response = test_client.get('/api/nao-existe')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'Rota não encontrada: /api/nao-existe'}


def test_rota_protegida_exige_token(test_client):
    """
    GIVEN um cliente sem token
    WHEN uma rota protegida é requisitada
    THEN verifica se a resposta é 401 em JSON
    """
    response = test_client.get('/api/servidores/')
    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_token_invalido(test_client):
    response = test_client.get('/api/auth/me', headers={'Authorization': 'Bearer token-falso'})
    assert response.status_code == 401


def test_erro_inesperado_vira_500_sem_detalhes(test_client, user_headers):
    with mock.patch('erp_rh.rh.relatorios_routes.RepositorioRH.contar_por_campo', side_effect=RuntimeError('falhou')):
        response = test_client.get('/api/relatorios/servidores-por-setor', headers=user_headers)
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Erro interno do servidor'}


def test_erro_de_banco_vira_500(test_client, user_headers, caplog):
    """
    GIVEN uma falha do SQLAlchemy durante a consulta
    WHEN a rota é requisitada
    THEN verifica se a sessão é desfeita, o erro é registrado no log e a resposta é 500 genérica
    """
    with mock.patch('erp_rh.rh.relatorios_routes.RepositorioRH.contar_por_campo',
                    side_effect=SQLAlchemyError('banco fora')), \
            mock.patch.object(db.session, 'rollback', wraps=db.session.rollback) as rollback:
        response = test_client.get('/api/relatorios/servidores-por-setor', headers=user_headers)
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Erro interno do servidor'}
    assert rollback.called
    assert 'Erro de acesso ao banco de dados' in caplog.text


def test_detalhes_do_erro_em_desenvolvimento(test_app, test_client, user_headers):
    """
    GIVEN a aplicação configurada para expor detalhes de erro
    WHEN ocorrem um erro de validação e um erro inesperado
    THEN verifica se as respostas trazem o campo details
    """
    test_app.config['EXPOSE_ERROR_DETAILS'] = True

    response = test_client.get('/api/relatorios/nao_existe', headers=user_headers)
    assert response.status_code == 400
    assert 'tipos_validos' in response.get_json()['details']

    with mock.patch('erp_rh.rh.relatorios_routes.RepositorioRH.contar_por_campo', side_effect=RuntimeError('falhou')):
        response = test_client.get('/api/relatorios/servidores-por-setor', headers=user_headers)
    assert response.status_code == 500
    assert 'falhou' in response.get_json()['details']
