# tests/conftest.py

import sys
import os
import pytest

# Adiciona o diretório raiz do projeto ao path do Python
# Isto permite que o pytest encontre o pacote 'erp_rh'
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from erp_rh import create_app, db
from erp_rh.auth import gerar_token
from erp_rh.config import TestingConfig
from erp_rh.models import Usuario
from erp_rh.models_rh import Servidor, Endereco, Ferias


@pytest.fixture(scope='function')
def test_app(tmp_path):
    """
    Cria uma instância da aplicação Flask para cada teste, garantindo isolamento total.
    """
    class Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)

    with app.app_context():
        db.create_all()
        yield app  # Fornece a instância da app para o teste
        db.session.remove()
        db.drop_all()  # Limpa a base de dados depois do teste


@pytest.fixture(scope='function')
def test_client(test_app):
    """
    Cria um cliente de teste para simular requisições HTTP para cada teste.
    """
    return test_app.test_client()


def _criar_usuario(email, role, password='senha123'):
    usuario = Usuario(name=email.split('@')[0], email=email, role=role)
    usuario.set_password(password)
    db.session.add(usuario)
    db.session.commit()
    return usuario


@pytest.fixture
def admin_user(test_app):
    return _criar_usuario('admin@test.com', 'admin')


@pytest.fixture
def common_user(test_app):
    return _criar_usuario('user@test.com', 'user')


@pytest.fixture
def admin_headers(admin_user):
    return {'Authorization': f'Bearer {gerar_token(admin_user)}'}


@pytest.fixture
def user_headers(common_user):
    return {'Authorization': f'Bearer {gerar_token(common_user)}'}


@pytest.fixture
def criar_servidor(test_app):
    """Fábrica de servidores com valores padrão; cada chamada gera um CPF novo."""
    contador = {'n': 0}

    def _criar(cidade=None, ferias=(), **campos):
        contador['n'] += 1
        dados = {
            'nome': f"Servidor {contador['n']}",
            'cargo': 'Analista',
            'cpf': f"000.000.000-{contador['n']:02d}",
            'email': f"servidor{contador['n']}@test.com",
            'setor': 'Tecnologia',
            'status': 'ativo',
        }
        dados.update(campos)
        servidor = Servidor(**dados)
        if cidade:
            servidor.enderecos.append(Endereco(cidade=cidade))
        for inicio, fim, status in ferias:
            servidor.ferias.append(Ferias(data_inicio=inicio, data_fim=fim, dias=(fim - inicio).days + 1,
                                          ano_referencia=inicio.year, status=status))
        db.session.add(servidor)
        db.session.commit()
        return servidor

    return _criar
