# erp_rh/rh/ferias.py

from datetime import date
from flask import Blueprint, request
from flask_login import login_required
from erp_rh import db
from erp_rh.models_rh import Servidor, Ferias
from erp_rh.decorators import admin_required
from erp_rh.responses import ErrorResponse, sucesso
from . import calculos
from .relatorios import FERIAS_APROVADAS
from .repositorio import RepositorioRH
from .validators import parse_data, parse_periodo, exigir_campos

bp = Blueprint('ferias', __name__, url_prefix='/api/ferias')


def _buscar_ferias(id):
    ferias = db.session.get(Ferias, id)
    if ferias is None:
        raise ErrorResponse('Férias não encontradas', 404)
    return ferias


def _lista(registros):
    return [f.to_dict() for f in registros]


def _inteiro(valor, campo):
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise ErrorResponse(f'Valor inválido para o campo {campo}', 400)


def _aplicar_periodo(ferias, data):
    """Atualiza as datas e recalcula o que depende delas."""
    inicio = parse_data(data['data_inicio'], 'data_inicio') if 'data_inicio' in data else ferias.data_inicio
    fim = parse_data(data['data_fim'], 'data_fim') if 'data_fim' in data else ferias.data_fim
    if inicio is None or fim is None:
        raise ErrorResponse('Data de início e fim são obrigatórias', 400)
    if fim < inicio:
        raise ErrorResponse('A data de fim não pode ser anterior à data de início', 400)

    mudou = (inicio, fim) != (ferias.data_inicio, ferias.data_fim)
    ferias.data_inicio = inicio
    ferias.data_fim = fim

    if data.get('dias') not in (None, ''):
        ferias.dias = _inteiro(data['dias'], 'dias')
    elif mudou or ferias.dias is None:
        ferias.dias = (fim - inicio).days + 1

    if data.get('ano_referencia') not in (None, ''):
        ferias.ano_referencia = _inteiro(data['ano_referencia'], 'ano_referencia')
    elif ferias.ano_referencia is None:
        ferias.ano_referencia = inicio.year


@bp.route('/')
@login_required
def listar_ferias():
    repo = RepositorioRH()
    return sucesso(_lista(repo.listar_ferias(status=request.args.get('status'), ordem='data_inicio_desc')))


@bp.route('/ativas')
@login_required
def ferias_ativas():
    """Férias aprovadas em andamento hoje."""
    hoje = date.today()
    aprovadas = RepositorioRH().listar_ferias(status=FERIAS_APROVADAS, ordem='data_inicio')
    return sucesso(_lista(calculos.filtrar_sobrepostos(aprovadas, hoje, hoje)))


@bp.route('/mes-atual')
@login_required
def ferias_mes_atual():
    hoje = date.today()
    inicio, fim = calculos.janela_do_mes(hoje.year, hoje.month)
    ferias = RepositorioRH().listar_ferias(ordem='data_inicio')
    return sucesso(_lista(calculos.filtrar_sobrepostos(ferias, inicio, fim)))


@bp.route('/servidor/<int:servidor_id>')
@login_required
def ferias_do_servidor(servidor_id):
    if db.session.get(Servidor, servidor_id) is None:
        raise ErrorResponse('Servidor não encontrado', 404)
    ferias = RepositorioRH().listar_ferias(servidor_id=servidor_id, ordem='data_inicio_desc')
    return sucesso(_lista(ferias))


@bp.route('/periodo')
@login_required
def ferias_por_periodo():
    inicio, fim = parse_periodo(request.args.get('dataInicio'), request.args.get('dataFim'), obrigatorio=True)
    ferias = RepositorioRH().listar_ferias(ordem='data_inicio')
    return sucesso(_lista(calculos.filtrar_sobrepostos(ferias, inicio, fim)))


@bp.route('/<int:id>')
@login_required
def ver_ferias(id):
    return sucesso(_buscar_ferias(id).to_dict(incluir_servidor=True))


@bp.route('/', methods=['POST'])
@login_required
@admin_required
def novas_ferias():
    data = request.get_json(silent=True) or {}
    exigir_campos(data, 'servidor_id', 'data_inicio', 'data_fim')
    if db.session.get(Servidor, data['servidor_id']) is None:
        raise ErrorResponse('Servidor não encontrado', 404)

    ferias = Ferias(servidor_id=data['servidor_id'],
                    status=data.get('status') or 'programadas',
                    observacoes=data.get('observacoes'))
    _aplicar_periodo(ferias, data)

    db.session.add(ferias)
    db.session.commit()
    return sucesso(ferias.to_dict(incluir_servidor=True), 'Férias cadastradas com sucesso', 201)


@bp.route('/<int:id>', methods=['PUT'])
@login_required
@admin_required
def editar_ferias(id):
    ferias = _buscar_ferias(id)
    data = request.get_json(silent=True) or {}

    if 'servidor_id' in data and data['servidor_id'] != ferias.servidor_id:
        if db.session.get(Servidor, data['servidor_id']) is None:
            raise ErrorResponse('Servidor não encontrado', 404)
        ferias.servidor_id = data['servidor_id']
    _aplicar_periodo(ferias, data)
    for campo in ('status', 'observacoes'):
        if campo in data:
            setattr(ferias, campo, data[campo])

    db.session.commit()
    return sucesso(ferias.to_dict(incluir_servidor=True), 'Férias atualizadas com sucesso')


@bp.route('/<int:id>', methods=['DELETE'])
@login_required
@admin_required
def excluir_ferias(id):
    ferias = _buscar_ferias(id)
    db.session.delete(ferias)
    db.session.commit()
    return sucesso(None, 'Férias deletadas com sucesso')
