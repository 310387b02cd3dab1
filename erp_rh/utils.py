# erp_rh/utils.py

import random
from datetime import date, timedelta
import click
from .models import db
from .models_rh import Servidor, Endereco, Ferias

SETORES = ["Administração", "Financeiro", "Recursos Humanos", "Tecnologia", "Jurídico", "Saúde"]
CARGOS = ["Analista", "Assistente", "Coordenador", "Técnico", "Auxiliar", "Gerente"]
CIDADES = [("Porto Alegre", "RS"), ("Canoas", "RS"), ("Florianópolis", "SC"), ("Curitiba", "PR")]
NOMES = ["Maria", "João", "Ana", "Pedro", "Carla", "Lucas", "Juliana", "Rafael", "Fernanda", "Bruno"]
SOBRENOMES = ["Silva", "Santos", "Costa", "Lima", "Oliveira", "Souza", "Pereira", "Almeida"]
STATUS_FERIAS = ["programadas", "aprovado", "aprovado", "concluido"]


def _data_aleatoria(inicio, fim):
    return inicio + timedelta(days=random.randint(0, (fim - inicio).days))


def popular_demo(quantidade=30, limpar=False):
    """Popula o banco com servidores, endereços e férias de demonstração."""
    if limpar:
        # Endereços e férias saem junto com os servidores
        for servidor in Servidor.query.all():
            db.session.delete(servidor)
        db.session.commit()

    hoje = date.today()
    criados = 0
    for i in range(quantidade):
        nome = f"{random.choice(NOMES)} {random.choice(SOBRENOMES)}"
        cpf = f"{random.randint(0, 999):03d}.{random.randint(0, 999):03d}.{random.randint(0, 999):03d}-{i % 100:02d}"
        if Servidor.query.filter_by(cpf=cpf).first():
            continue

        admissao = _data_aleatoria(date(hoje.year - 25, 1, 1), hoje)
        inativo = random.random() < 0.15
        servidor = Servidor(
            nome=nome,
            cargo=random.choice(CARGOS),
            cpf=cpf,
            email=f"{nome.lower().replace(' ', '.')}{i}@exemplo.com",
            telefone=f"(51) 9{random.randint(1000, 9999)}-{random.randint(1000, 9999)}",
            setor=random.choice(SETORES),
            status='inativo' if inativo else 'ativo',
            data_nascimento=_data_aleatoria(date(hoje.year - 62, 1, 1), date(hoje.year - 19, 12, 31)),
            data_admissao=admissao,
            data_demissao=_data_aleatoria(admissao, hoje) if inativo else None,
        )
        cidade, estado = random.choice(CIDADES)
        servidor.enderecos.append(Endereco(
            logradouro=f"Rua Demo, {random.randint(1, 999)}", numero=str(random.randint(1, 999)),
            bairro="Centro", cidade=cidade, estado=estado, cep=f"9{random.randint(1000000, 9999999)}"
        ))

        for _ in range(random.randint(0, 2)):
            inicio = _data_aleatoria(date(hoje.year, 1, 1), date(hoje.year, 12, 31))
            dias = random.choice([10, 15, 20, 30])
            servidor.ferias.append(Ferias(
                data_inicio=inicio, data_fim=inicio + timedelta(days=dias - 1),
                dias=dias, ano_referencia=inicio.year, status=random.choice(STATUS_FERIAS)
            ))

        db.session.add(servidor)
        criados += 1

    db.session.commit()
    return criados


def register_commands(app):
    @app.cli.command('popular-demo')
    @click.option('--quantidade', default=30, show_default=True, help='Número de servidores a criar.')
    @click.option('--limpar', is_flag=True, help='Remove os servidores existentes antes.')
    def popular_demo_command(quantidade, limpar):
        """Popula o banco com dados de demonstração."""
        criados = popular_demo(quantidade, limpar)
        app.logger.info(f"popular-demo: {criados} servidores de demonstração criados.")
        click.echo(f"Banco de dados populado com {criados} servidores!")
