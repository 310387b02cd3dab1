# erp_rh/rh/aniversariantes.py

from datetime import date, datetime
from flask import Blueprint
from flask_login import login_required
from erp_rh.responses import sucesso
from . import relatorios
from .repositorio import RepositorioRH
from .validators import parse_ano, parse_mes

bp = Blueprint('aniversariantes', __name__, url_prefix='/api/aniversariantes')


@bp.route('/semana')
@login_required
def da_semana():
    return sucesso(relatorios.aniversariantes_da_semana(RepositorioRH(), date.today()))


@bp.route('/ano', defaults={'ano': None})
@bp.route('/ano/<ano>')
@login_required
def do_ano(ano):
    ano = parse_ano(ano)
    return sucesso(relatorios.aniversariantes_do_ano(RepositorioRH(), ano))


@bp.route('/<mes>')
@login_required
def do_mes(mes):
    # O mês chega como texto para que valores inválidos virem 400 e não 404
    mes = parse_mes(mes)
    return sucesso(relatorios.aniversariantes_do_mes(RepositorioRH(), mes, date.today()))


@bp.route('/<mes>/pdf')
@login_required
def do_mes_para_impressao(mes):
    """Dados prontos para o frontend gerar o PDF do mês."""
    mes = parse_mes(mes)
    hoje = date.today()
    lista = relatorios.aniversariantes_do_mes(RepositorioRH(), mes, hoje)
    titulo = f'Aniversariantes de {relatorios.NOMES_MESES[mes - 1]}'
    return sucesso(relatorios.envelope(titulo, lista, datetime.now()))
