# erp_rh/rh/exportacao.py

import re
from io import BytesIO
import openpyxl

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _titulo_da_aba(titulo):
    # O Excel limita o nome da aba a 31 caracteres e proíbe alguns símbolos
    return re.sub(r'[\\/*?:\[\]]', '-', titulo)[:31] or 'Relatorio'


def gerar_planilha(relatorio):
    """Converte o relatório exportado (title/data) numa planilha .xlsx em memória."""
    output = BytesIO()
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = _titulo_da_aba(relatorio['title'])

    linhas = relatorio['data']
    if linhas:
        headers = list(linhas[0].keys())
        sheet.append(headers)
        for linha in linhas:
            sheet.append([linha.get(coluna) for coluna in headers])

    workbook.save(output)
    output.seek(0)
    return output


def nome_arquivo(tipo, agora):
    return f"relatorio_{tipo}_{agora.strftime('%Y%m%d')}.xlsx"
