# erp_rh/rh/relatorios_routes.py

from datetime import date, datetime
from flask import Blueprint, Response, request
from flask_login import login_required
from erp_rh.responses import sucesso
from . import relatorios
from .exportacao import XLSX_MIMETYPE, gerar_planilha, nome_arquivo
from .relatorios import FERIAS_APROVADAS, STATUS_ATIVO
from .repositorio import RepositorioRH
from .validators import parse_ano, parse_mes

bp = Blueprint('relatorios', __name__, url_prefix='/api/relatorios')


@bp.route('/resumo-mensal')
@login_required
def resumo_mensal():
    hoje = date.today()
    mes = parse_mes(request.args.get('mes'), hoje)
    ano = parse_ano(request.args.get('ano'), hoje)
    return sucesso(relatorios.resumo_mensal(RepositorioRH(), mes, ano, hoje))


@bp.route('/servidores-por-setor')
@login_required
def servidores_por_setor():
    contagem = RepositorioRH().contar_por_campo('setor', status=STATUS_ATIVO)
    return sucesso([{'setor': setor, 'total': total} for setor, total in contagem])


@bp.route('/ferias-por-mes/<ano>')
@login_required
def ferias_por_mes(ano):
    ano = parse_ano(ano)
    aprovadas = RepositorioRH().listar_ferias(status=FERIAS_APROVADAS)
    return sucesso(relatorios.ferias_por_mes(aprovadas, ano))


@bp.route('/exportar/<tipo>')
@login_required
def exportar(tipo):
    agora = datetime.now()
    payload = relatorios.montar_exportacao(tipo, request.args, RepositorioRH(), agora)

    if request.args.get('formato') == 'xlsx':
        output = gerar_planilha(payload)
        return Response(output, mimetype=XLSX_MIMETYPE,
                        headers={"Content-Disposition": f"attachment;filename={nome_arquivo(tipo, agora)}"})
    return sucesso(payload)


@bp.route('/<tipo>')
@login_required
def gerar_relatorio(tipo):
    relatorio = relatorios.interpretar_relatorio(tipo, request.args)
    return sucesso(relatorios.montar_relatorio(relatorio, RepositorioRH()))
