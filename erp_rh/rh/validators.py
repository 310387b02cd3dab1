# erp_rh/rh/validators.py

from datetime import date, datetime, MINYEAR
from erp_rh.responses import ErrorResponse


def parse_data(valor, campo='data'):
    """Converte 'YYYY-MM-DD' em date. Aceita também data e hora ISO ('...T...'). Valores vazios viram None."""
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    texto = str(valor).strip()
    try:
        if len(texto) > 10 and texto[10] == 'T':
            return datetime.fromisoformat(texto.replace('Z', '+00:00')).date()
        return datetime.strptime(texto, '%Y-%m-%d').date()
    except ValueError:
        raise ErrorResponse(f'Data inválida para o campo {campo}. Use o formato AAAA-MM-DD', 400)


def parse_mes(valor, hoje=None):
    """Mês de 1 a 12; ausente vira o mês atual."""
    if valor is None or valor == '':
        return (hoje or date.today()).month
    try:
        mes = int(valor)
    except (TypeError, ValueError):
        raise ErrorResponse('Mês inválido. Use valores de 1 a 12', 400)
    if mes < 1 or mes > 12:
        raise ErrorResponse('Mês inválido. Use valores de 1 a 12', 400)
    return mes


def parse_ano(valor, hoje=None):
    """Ano com 4 dígitos; ausente vira o ano atual."""
    if valor is None or valor == '':
        return (hoje or date.today()).year
    texto = str(valor).strip()
    # isdigit() sozinho aceita dígitos Unicode como '²'
    if len(texto) != 4 or not (texto.isascii() and texto.isdigit()) or int(texto) < MINYEAR:
        raise ErrorResponse('Ano inválido. Use um ano com 4 dígitos', 400)
    return int(texto)


def parse_periodo(inicio, fim, obrigatorio=False):
    """Valida um par de datas (ambas ou nenhuma) com início <= fim."""
    data_inicio = parse_data(inicio, 'data_inicio')
    data_fim = parse_data(fim, 'data_fim')
    if data_inicio is None and data_fim is None:
        if obrigatorio:
            raise ErrorResponse('Data de início e fim são obrigatórias', 400)
        return None, None
    if data_inicio is None or data_fim is None:
        raise ErrorResponse('Data de início e fim são obrigatórias', 400)
    if data_fim < data_inicio:
        raise ErrorResponse('A data de fim não pode ser anterior à data de início', 400)
    return data_inicio, data_fim


def is_cpf_valid(cpf):
    # Aceita CPF com ou sem formatação
    return cpf is not None and 11 <= len(str(cpf).strip()) <= 14


def exigir_campos(dados, *campos):
    faltando = [campo for campo in campos if dados.get(campo) in (None, '')]
    if faltando:
        raise ErrorResponse('Campos obrigatórios ausentes', 400, faltando)
