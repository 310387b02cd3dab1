# erp_rh/rh/calculos.py

from datetime import date, timedelta
import calendar

# Limite superior (inclusivo) de cada faixa; None = sem limite
FAIXAS_ETARIAS = (
    ('18-25', 25),
    ('26-35', 35),
    ('36-45', 45),
    ('46-55', 55),
    ('56+', None),
)

FAIXAS_TEMPO_SERVICO = (
    ('0-1 ano', 1),
    ('1-5 anos', 5),
    ('5-10 anos', 10),
    ('10-20 anos', 20),
    ('20+ anos', None),
)

DIAS_POR_ANO = 365


# --- JANELAS DE DATAS ---
def janela_do_mes(ano, mes):
    """Primeiro e último dia do mês."""
    if mes < 1 or mes > 12:
        raise ValueError(f"Mês inválido: {mes}")
    _, ultimo_dia = calendar.monthrange(ano, mes)
    return date(ano, mes, 1), date(ano, mes, ultimo_dia)


def janela_do_ano(ano):
    return date(ano, 1, 1), date(ano, 12, 31)


def janela_da_semana(referencia):
    """Domingo a sábado da semana que contém a data de referência."""
    inicio = referencia - timedelta(days=(referencia.weekday() + 1) % 7)
    return inicio, inicio + timedelta(days=6)


def contem_data(data, inicio, fim):
    return data is not None and inicio <= data <= fim


def sobrepoe_janela(data_inicio, data_fim, inicio, fim):
    """Começa na janela, termina na janela, ou cobre a janela inteira."""
    if contem_data(data_inicio, inicio, fim) or contem_data(data_fim, inicio, fim):
        return True
    if data_inicio is None or data_fim is None:
        return False
    return data_inicio <= inicio and data_fim >= fim


def mesmo_mes(data, mes):
    if mes < 1 or mes > 12:
        raise ValueError(f"Mês inválido: {mes}")
    return data is not None and data.month == mes


def filtrar_por_data(registros, campo, inicio, fim):
    return [r for r in registros if contem_data(getattr(r, campo), inicio, fim)]


def filtrar_sobrepostos(registros, inicio, fim, campo_inicio='data_inicio', campo_fim='data_fim'):
    return [
        r for r in registros
        if sobrepoe_janela(getattr(r, campo_inicio), getattr(r, campo_fim), inicio, fim)
    ]


def filtrar_por_mes(registros, campo, mes):
    """Filtra pelo mês do calendário, ignorando o ano (aniversários)."""
    return [r for r in registros if mesmo_mes(getattr(r, campo), mes)]


# --- IDADE E TEMPO DE SERVIÇO ---
def aniversario_no_ano(nascimento, ano):
    # Nascidos em 29/02 fazem aniversário em 28/02 nos anos não bissextos
    try:
        return nascimento.replace(year=ano)
    except ValueError:
        return date(ano, 2, 28)


def calcular_idade(nascimento, referencia=None):
    """Idade em anos completos na data de referência."""
    if nascimento is None:
        return None
    referencia = referencia or date.today()
    idade = referencia.year - nascimento.year
    if (referencia.month, referencia.day) < (nascimento.month, nascimento.day):
        idade -= 1
    return idade


def calcular_tempo_servico(admissao, referencia=None):
    """
    Tempo de serviço em anos fracionários.
    Usa ano fixo de 365 dias (aproximação mantida para que os números batam
    com os relatórios já emitidos).
    """
    if admissao is None:
        return None
    referencia = referencia or date.today()
    return (referencia - admissao).days / DIAS_POR_ANO


def _faixa(valor, faixas):
    for rotulo, limite in faixas:
        if limite is None or valor <= limite:
            return rotulo
    return faixas[-1][0]


def faixa_etaria(idade):
    return _faixa(idade, FAIXAS_ETARIAS)


def faixa_tempo_servico(anos):
    return _faixa(anos, FAIXAS_TEMPO_SERVICO)


# --- AGREGAÇÃO ---
def agregar_por_campo(registros, campo, chave=None):
    """
    Conta os registros por valor do campo, do maior para o menor total.
    Empates mantêm a ordem em que o valor apareceu primeiro.
    """
    contagem = {}
    for registro in registros:
        valor = getattr(registro, campo)
        contagem[valor] = contagem.get(valor, 0) + 1
    ordenado = sorted(contagem.items(), key=lambda item: -item[1])
    nome = chave or campo
    return [{nome: valor, 'total': total} for valor, total in ordenado]


def agregar_por_faixa(rotulos, faixas):
    """Sempre devolve todas as faixas, na ordem fixa, inclusive as zeradas."""
    contagem = {rotulo: 0 for rotulo, _ in faixas}
    for rotulo in rotulos:
        contagem[rotulo] += 1
    return [{'faixa': rotulo, 'total': total} for rotulo, total in contagem.items()]


def distribuicao_etaria(servidores, referencia=None):
    referencia = referencia or date.today()
    rotulos = [
        faixa_etaria(calcular_idade(s.data_nascimento, referencia))
        for s in servidores if s.data_nascimento is not None
    ]
    return agregar_por_faixa(rotulos, FAIXAS_ETARIAS)


def distribuicao_tempo_servico(servidores, referencia=None):
    referencia = referencia or date.today()
    rotulos = [
        faixa_tempo_servico(calcular_tempo_servico(s.data_admissao, referencia))
        for s in servidores if s.data_admissao is not None
    ]
    return agregar_por_faixa(rotulos, FAIXAS_TEMPO_SERVICO)


def somar_totais(linhas):
    return sum(linha['total'] for linha in linhas)
