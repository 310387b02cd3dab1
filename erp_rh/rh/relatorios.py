# erp_rh/rh/relatorios.py

"""Montagem dos relatórios de RH.

Cada tipo de relatório é uma classe própria com apenas os parâmetros de que
precisa. `interpretar_relatorio` converte o tipo recebido na URL (e os
parâmetros da query string) numa dessas classes; é o único ponto em que um
tipo desconhecido pode aparecer. `montar_relatorio` despacha pela classe.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar, Optional

from erp_rh.responses import ErrorResponse
from . import calculos
from .validators import parse_ano, parse_mes, parse_periodo

STATUS_ATIVO = 'ativo'
STATUS_INATIVO = 'inativo'
FERIAS_APROVADAS = 'aprovado'

NOMES_MESES = (
    'Janeiro', 'Fevereiro', 'Março', 'Abril', 'Maio', 'Junho',
    'Julho', 'Agosto', 'Setembro', 'Outubro', 'Novembro', 'Dezembro',
)


# --- TIPOS DE RELATÓRIO ---
@dataclass(frozen=True)
class ListaFuncionarios:
    tipo: ClassVar[str] = 'lista_funcionarios'


@dataclass(frozen=True)
class FuncionariosPorSetor:
    tipo: ClassVar[str] = 'funcionarios_por_setor'
    campo: ClassVar[str] = 'setor'
    titulo: ClassVar[str] = 'Funcionários por Setor'
    somente_ativos: ClassVar[bool] = True


@dataclass(frozen=True)
class FuncionariosPorStatus:
    tipo: ClassVar[str] = 'funcionarios_por_status'
    campo: ClassVar[str] = 'status'
    titulo: ClassVar[str] = 'Funcionários por Status'
    somente_ativos: ClassVar[bool] = False


@dataclass(frozen=True)
class FuncionariosPorCidade:
    tipo: ClassVar[str] = 'funcionarios_por_cidade'
    campo: ClassVar[str] = 'cidade'
    titulo: ClassVar[str] = 'Funcionários por Cidade'
    somente_ativos: ClassVar[bool] = True


@dataclass(frozen=True)
class FuncionariosPorCargo:
    tipo: ClassVar[str] = 'funcionarios_por_cargo'
    campo: ClassVar[str] = 'cargo'
    titulo: ClassVar[str] = 'Funcionários por Cargo'
    somente_ativos: ClassVar[bool] = True


@dataclass(frozen=True)
class FeriasPorMes:
    ano: int
    tipo: ClassVar[str] = 'ferias_por_mes'


@dataclass(frozen=True)
class AniversariantesPorMes:
    mes: int
    tipo: ClassVar[str] = 'aniversariantes_por_mes'


@dataclass(frozen=True)
class AdmissoesDemissoes:
    ano: int
    tipo: ClassVar[str] = 'admissoes_demissoes'


@dataclass(frozen=True)
class FeriasPorSetor:
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    tipo: ClassVar[str] = 'ferias_por_setor'


@dataclass(frozen=True)
class IdadeFuncionarios:
    tipo: ClassVar[str] = 'idade_funcionarios'


@dataclass(frozen=True)
class TempoServico:
    tipo: ClassVar[str] = 'tempo_servico'


TIPOS_RELATORIO = {
    cls.tipo: cls for cls in (
        ListaFuncionarios, FuncionariosPorSetor, FuncionariosPorStatus,
        FuncionariosPorCidade, FuncionariosPorCargo, FeriasPorMes,
        AniversariantesPorMes, AdmissoesDemissoes, FeriasPorSetor,
        IdadeFuncionarios, TempoServico,
    )
}


def interpretar_relatorio(tipo, params=None, hoje=None):
    """Valida o tipo e os parâmetros e devolve o relatório correspondente."""
    params = params or {}
    hoje = hoje or date.today()
    cls = TIPOS_RELATORIO.get(tipo)
    if cls is None:
        raise ErrorResponse('Tipo de relatório inválido', 400, {'tipos_validos': sorted(TIPOS_RELATORIO)})

    data_inicio, data_fim = parse_periodo(params.get('data_inicio'), params.get('data_fim'))

    if cls in (FeriasPorMes, AdmissoesDemissoes):
        return cls(ano=parse_ano(params.get('ano'), hoje))
    if cls is AniversariantesPorMes:
        return cls(mes=parse_mes(params.get('mes'), hoje))
    if cls is FeriasPorSetor:
        return cls(data_inicio=data_inicio, data_fim=data_fim)
    return cls()


# --- FORMATOS COMPARTILHADOS ---
def _com_idade(servidor, idade):
    dados = servidor.to_dict()
    dados.update({
        'idade': idade,
        'diaAniversario': servidor.data_nascimento.day,
        'proximaIdade': idade + 1,
    })
    return dados


def aniversariante(servidor, hoje):
    """Dados do servidor com idade atual, dia do aniversário e próxima idade."""
    return _com_idade(servidor, calculos.calcular_idade(servidor.data_nascimento, hoje))


def aniversariantes_do_mes(repositorio, mes, hoje):
    servidores = repositorio.listar_servidores(status=STATUS_ATIVO, com_nascimento=True, ordem='data_nascimento')
    return [aniversariante(s, hoje) for s in calculos.filtrar_por_mes(servidores, 'data_nascimento', mes)]


def aniversariantes_da_semana(repositorio, hoje):
    inicio, fim = calculos.janela_da_semana(hoje)
    servidores = repositorio.listar_servidores(status=STATUS_ATIVO, com_nascimento=True, ordem='data_nascimento')
    # A semana pode atravessar a virada do ano
    anos = {inicio.year, fim.year}
    da_semana = [
        s for s in servidores
        if any(calculos.contem_data(calculos.aniversario_no_ano(s.data_nascimento, ano), inicio, fim) for ano in anos)
    ]
    return [aniversariante(s, hoje) for s in da_semana]


def aniversariantes_do_ano(repositorio, ano):
    servidores = repositorio.listar_servidores(status=STATUS_ATIVO, com_nascimento=True, ordem='data_nascimento')
    por_mes = {}
    todos = []
    for servidor in servidores:
        # Idade que o servidor completa no ano consultado
        dados = _com_idade(servidor, ano - servidor.data_nascimento.year)
        por_mes.setdefault(servidor.data_nascimento.month, []).append(dados)
        todos.append(dados)
    return {'aniversariantes': todos, 'porMes': por_mes, 'ano': ano}


def ferias_por_mes(ferias, ano):
    """Quantidade de férias que tocam cada mês do ano, de 1 a 12."""
    serie = []
    for mes in range(1, 13):
        inicio, fim = calculos.janela_do_mes(ano, mes)
        serie.append({'mes': mes, 'total': len(calculos.filtrar_sobrepostos(ferias, inicio, fim))})
    return serie


def resumo_mensal(repositorio, mes, ano, hoje):
    inicio, fim = calculos.janela_do_mes(ano, mes)
    aprovadas = repositorio.listar_ferias(status=FERIAS_APROVADAS)
    ativos = repositorio.listar_servidores(status=STATUS_ATIVO, com_nascimento=True)
    return {
        'mes': mes,
        'ano': ano,
        'totalServidores': repositorio.contar_servidores(status=STATUS_ATIVO),
        'feriasNoMes': len(calculos.filtrar_sobrepostos(aprovadas, inicio, fim)),
        'aniversariantes': len(calculos.filtrar_por_mes(ativos, 'data_nascimento', mes)),
    }


# --- MONTADORES ---
def _lista_funcionarios(relatorio, repositorio, hoje):
    servidores = repositorio.listar_servidores(status=STATUS_ATIVO, ordem='nome')
    return 'Lista de Funcionários', [s.to_dict() for s in servidores]


def _funcionarios_por_campo(relatorio, repositorio, hoje):
    status = STATUS_ATIVO if relatorio.somente_ativos else None
    servidores = repositorio.listar_servidores(status=status)
    return relatorio.titulo, calculos.agregar_por_campo(servidores, relatorio.campo)


def _ferias_por_mes(relatorio, repositorio, hoje):
    aprovadas = repositorio.listar_ferias(status=FERIAS_APROVADAS)
    return f'Férias por Mês - {relatorio.ano}', ferias_por_mes(aprovadas, relatorio.ano)


def _aniversariantes_por_mes(relatorio, repositorio, hoje):
    return f'Aniversariantes - Mês {relatorio.mes}', aniversariantes_do_mes(repositorio, relatorio.mes, hoje)


def _admissoes_demissoes(relatorio, repositorio, hoje):
    inicio, fim = calculos.janela_do_ano(relatorio.ano)
    todos = repositorio.listar_servidores()
    inativos = [s for s in todos if s.status == STATUS_INATIVO]
    dados = {
        'admissoes': len(calculos.filtrar_por_data(todos, 'data_admissao', inicio, fim)),
        'demissoes': len(calculos.filtrar_por_data(inativos, 'data_demissao', inicio, fim)),
        'ano': relatorio.ano,
    }
    return f'Admissões e Demissões - {relatorio.ano}', dados


def _ferias_por_setor(relatorio, repositorio, hoje):
    aprovadas = repositorio.listar_ferias(status=FERIAS_APROVADAS)
    if relatorio.data_inicio is not None:
        aprovadas = calculos.filtrar_sobrepostos(aprovadas, relatorio.data_inicio, relatorio.data_fim)
    return 'Férias por Setor', calculos.agregar_por_campo(aprovadas, 'setor')


def _idade_funcionarios(relatorio, repositorio, hoje):
    servidores = repositorio.listar_servidores(status=STATUS_ATIVO, com_nascimento=True)
    return 'Distribuição de Idade', calculos.distribuicao_etaria(servidores, hoje)


def _tempo_servico(relatorio, repositorio, hoje):
    servidores = repositorio.listar_servidores(status=STATUS_ATIVO, com_admissao=True)
    return 'Tempo de Serviço', calculos.distribuicao_tempo_servico(servidores, hoje)


MONTADORES = {
    ListaFuncionarios: _lista_funcionarios,
    FuncionariosPorSetor: _funcionarios_por_campo,
    FuncionariosPorStatus: _funcionarios_por_campo,
    FuncionariosPorCidade: _funcionarios_por_campo,
    FuncionariosPorCargo: _funcionarios_por_campo,
    FeriasPorMes: _ferias_por_mes,
    AniversariantesPorMes: _aniversariantes_por_mes,
    AdmissoesDemissoes: _admissoes_demissoes,
    FeriasPorSetor: _ferias_por_setor,
    IdadeFuncionarios: _idade_funcionarios,
    TempoServico: _tempo_servico,
}


def envelope(titulo, dados, agora):
    return {
        'title': titulo,
        'data': dados,
        'generatedAt': agora.isoformat(timespec='seconds'),
        'total': len(dados) if isinstance(dados, list) else 1,
    }


def montar_relatorio(relatorio, repositorio, agora=None):
    agora = agora or datetime.now()
    montador = MONTADORES[type(relatorio)]
    titulo, dados = montador(relatorio, repositorio, agora.date())
    return envelope(titulo, dados, agora)


# --- EXPORTAÇÃO ---
TIPOS_EXPORTACAO = ('servidores', 'ferias', 'aniversariantes')


def montar_exportacao(tipo, params, repositorio, agora=None):
    """Listagens completas para download (JSON ou planilha)."""
    agora = agora or datetime.now()
    hoje = agora.date()
    if tipo == 'servidores':
        servidores = repositorio.listar_servidores(status=STATUS_ATIVO, ordem='nome')
        return envelope('Relatório de Servidores', [s.to_dict() for s in servidores], agora)
    if tipo == 'ferias':
        ferias = repositorio.listar_ferias(ordem='data_inicio_desc')
        return envelope('Relatório de Férias', [f.to_dict() for f in ferias], agora)
    if tipo == 'aniversariantes':
        mes = parse_mes(params.get('mes'), hoje)
        return envelope(f'Aniversariantes - Mês {mes}', aniversariantes_do_mes(repositorio, mes, hoje), agora)
    raise ErrorResponse('Tipo de relatório inválido', 400, {'tipos_validos': list(TIPOS_EXPORTACAO)})
