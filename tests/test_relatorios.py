# tests/test_relatorios.py

from datetime import date, datetime
import pytest
from erp_rh.responses import ErrorResponse
from erp_rh.rh import relatorios
from erp_rh.rh.repositorio import RepositorioRH

AGORA = datetime(2024, 6, 15, 10, 30)


def _montar(tipo, **params):
    relatorio = relatorios.interpretar_relatorio(tipo, params, hoje=AGORA.date())
    return relatorios.montar_relatorio(relatorio, RepositorioRH(), AGORA)


def test_todo_tipo_de_relatorio_tem_montador():
    assert set(relatorios.MONTADORES) == set(relatorios.TIPOS_RELATORIO.values())


def test_tipo_desconhecido_gera_erro_de_validacao():
    with pytest.raises(ErrorResponse) as excinfo:
        relatorios.interpretar_relatorio('relatorio_inexistente')
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize('params', [
    {'mes': '13'}, {'mes': 'abc'}, {'ano': '24'}, {'data_inicio': '2024-01-01'},
    {'data_inicio': '2024-02-01', 'data_fim': '2024-01-01'}, {'data_inicio': '01/02/2024', 'data_fim': '2024-03-01'},
    {'ano': '0000'}, {'ano': '²²²²'}, {'data_inicio': '2024-06-01lixo', 'data_fim': '2024-06-30'},
])
def test_parametros_invalidos(params):
    tipo = 'aniversariantes_por_mes' if 'mes' in params else 'ferias_por_mes'
    with pytest.raises(ErrorResponse) as excinfo:
        relatorios.interpretar_relatorio(tipo, params)
    assert excinfo.value.status_code == 400


def test_data_com_horario_iso():
    """
    GIVEN datas enviadas com horário no formato ISO
    WHEN o período é interpretado
    THEN verifica se apenas a parte da data é usada
    """
    relatorio = relatorios.interpretar_relatorio('ferias_por_setor', {
        'data_inicio': '2024-06-01T00:00:00Z', 'data_fim': '2024-06-30T23:59:59',
    })
    assert relatorio == relatorios.FeriasPorSetor(data_inicio=date(2024, 6, 1), data_fim=date(2024, 6, 30))


def test_parametros_padrao_usam_data_atual():
    hoje = date(2024, 6, 15)
    assert relatorios.interpretar_relatorio('ferias_por_mes', {}, hoje) == relatorios.FeriasPorMes(ano=2024)
    assert relatorios.interpretar_relatorio('aniversariantes_por_mes', {}, hoje) == relatorios.AniversariantesPorMes(mes=6)


def test_admissoes_e_demissoes(criar_servidor):
    """
    GIVEN cinco admissões em 2023, duas demissões de inativos em 2023 e uma em 2022
    WHEN o relatório de admissões e demissões de 2023 é montado
    THEN verifica se os totais são 5 e 2
    """
    for mes in range(1, 6):
        criar_servidor(data_admissao=date(2023, mes, 10))
    criar_servidor(status='inativo', data_admissao=date(2015, 1, 1), data_demissao=date(2023, 3, 1))
    criar_servidor(status='inativo', data_admissao=date(2016, 1, 1), data_demissao=date(2023, 8, 1))
    criar_servidor(status='inativo', data_admissao=date(2017, 1, 1), data_demissao=date(2022, 8, 1))
    # Demissão registrada mas servidor ainda ativo não conta
    criar_servidor(data_admissao=date(2018, 1, 1), data_demissao=date(2023, 9, 1))

    resultado = _montar('admissoes_demissoes', ano='2023')
    assert resultado['title'] == 'Admissões e Demissões - 2023'
    assert resultado['data'] == {'admissoes': 5, 'demissoes': 2, 'ano': 2023}
    assert resultado['total'] == 1
    assert resultado['generatedAt'] == '2024-06-15T10:30:00'


def test_funcionarios_por_setor_somente_ativos(criar_servidor):
    criar_servidor(setor='RH')
    criar_servidor(setor='TI')
    criar_servidor(setor='TI')
    criar_servidor(setor='Jurídico', status='inativo')

    resultado = _montar('funcionarios_por_setor')
    assert resultado['data'] == [{'setor': 'TI', 'total': 2}, {'setor': 'RH', 'total': 1}]
    assert resultado['total'] == 2

    por_status = _montar('funcionarios_por_status')
    assert por_status['data'] == [{'status': 'ativo', 'total': 3}, {'status': 'inativo', 'total': 1}]


def test_funcionarios_por_cidade_usa_primeiro_endereco(criar_servidor):
    criar_servidor(cidade='Canoas')
    criar_servidor(cidade='Porto Alegre')
    criar_servidor(cidade='Porto Alegre')
    criar_servidor()

    resultado = _montar('funcionarios_por_cidade')
    assert resultado['data'] == [
        {'cidade': 'Porto Alegre', 'total': 2},
        {'cidade': 'Canoas', 'total': 1},
        {'cidade': None, 'total': 1},
    ]


def test_ferias_por_mes_sobreposicao(criar_servidor):
    """
    GIVEN férias aprovadas de 20/05/2024 a 10/07/2024 e férias apenas programadas em junho
    WHEN a série de férias por mês de 2024 é montada
    THEN verifica se maio, junho e julho contam as aprovadas e a série tem 12 meses
    """
    criar_servidor(ferias=[
        (date(2024, 5, 20), date(2024, 7, 10), 'aprovado'),
        (date(2024, 6, 1), date(2024, 6, 10), 'programadas'),
    ])
    resultado = _montar('ferias_por_mes', ano='2024')
    assert [linha['mes'] for linha in resultado['data']] == list(range(1, 13))
    totais = {linha['mes']: linha['total'] for linha in resultado['data']}
    assert totais[5] == totais[6] == totais[7] == 1
    assert sum(totais.values()) == 3


def test_ferias_por_setor_com_periodo(criar_servidor):
    criar_servidor(setor='RH', ferias=[(date(2024, 1, 5), date(2024, 1, 20), 'aprovado')])
    criar_servidor(setor='TI', ferias=[
        (date(2024, 6, 3), date(2024, 6, 17), 'aprovado'),
        (date(2024, 12, 1), date(2024, 12, 15), 'aprovado'),
    ])

    todos = _montar('ferias_por_setor')
    assert todos['data'] == [{'setor': 'TI', 'total': 2}, {'setor': 'RH', 'total': 1}]

    junho = _montar('ferias_por_setor', data_inicio='2024-06-01', data_fim='2024-06-30')
    assert junho['data'] == [{'setor': 'TI', 'total': 1}]


def test_aniversariantes_por_mes(criar_servidor):
    criar_servidor(nome='Março tarde', data_nascimento=date(1985, 3, 28))
    criar_servidor(nome='Janeiro', data_nascimento=date(1990, 1, 10))
    criar_servidor(nome='Março cedo', data_nascimento=date(2000, 3, 15))
    criar_servidor(nome='Inativo', status='inativo', data_nascimento=date(1990, 3, 1))
    criar_servidor(nome='Sem data')

    resultado = _montar('aniversariantes_por_mes', mes='3')
    assert resultado['title'] == 'Aniversariantes - Mês 3'
    nomes = [s['nome'] for s in resultado['data']]
    assert nomes == ['Março tarde', 'Março cedo']
    assert resultado['data'][1]['idade'] == 24
    assert resultado['data'][1]['diaAniversario'] == 15
    assert resultado['data'][1]['proximaIdade'] == 25


def test_idade_e_tempo_servico(criar_servidor):
    criar_servidor(data_nascimento=date(2000, 1, 1), data_admissao=date(2024, 1, 1))
    criar_servidor(data_nascimento=date(1960, 1, 1), data_admissao=date(2000, 1, 1))
    criar_servidor()

    idade = _montar('idade_funcionarios')
    assert idade['total'] == 5
    assert [l['total'] for l in idade['data']] == [1, 0, 0, 0, 1]

    tempo = _montar('tempo_servico')
    assert [l['faixa'] for l in tempo['data']] == ['0-1 ano', '1-5 anos', '5-10 anos', '10-20 anos', '20+ anos']
    assert [l['total'] for l in tempo['data']] == [1, 0, 0, 0, 1]


def test_lista_funcionarios_ordenada_por_nome(criar_servidor):
    criar_servidor(nome='Carla')
    criar_servidor(nome='Ana')
    criar_servidor(nome='Bruno', status='inativo')

    resultado = _montar('lista_funcionarios')
    assert [s['nome'] for s in resultado['data']] == ['Ana', 'Carla']
    assert 'password_hash' not in resultado['data'][0]


def test_rota_de_relatorio(test_client, user_headers, criar_servidor):
    criar_servidor(setor='RH')
    response = test_client.get('/api/relatorios/funcionarios_por_setor', headers=user_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['title'] == 'Funcionários por Setor'
    assert body['data']['data'] == [{'setor': 'RH', 'total': 1}]


def test_rota_de_relatorio_invalido(test_client, user_headers):
    response = test_client.get('/api/relatorios/nao_existe', headers=user_headers)
    assert response.status_code == 400
    assert response.get_json()['success'] is False

    response = test_client.get('/api/relatorios/aniversariantes_por_mes?mes=13', headers=user_headers)
    assert response.status_code == 400


def test_ano_zero_ou_com_digitos_unicode(test_client, user_headers):
    """
    GIVEN anos '0000' e '²²²²' na URL
    WHEN as rotas que recebem ano são requisitadas
    THEN verifica se a resposta é 400 e não um erro interno
    """
    for ano in ('0000', '²²²²'):
        response = test_client.get(f'/api/relatorios/ferias-por-mes/{ano}', headers=user_headers)
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Ano inválido. Use um ano com 4 dígitos'

        response = test_client.get(f'/api/aniversariantes/ano/{ano}', headers=user_headers)
        assert response.status_code == 400


def test_rota_de_relatorio_exige_login(test_client):
    response = test_client.get('/api/relatorios/lista_funcionarios')
    assert response.status_code == 401


def test_resumo_mensal(test_client, user_headers, criar_servidor):
    criar_servidor(data_nascimento=date(1990, 6, 2), ferias=[(date(2024, 6, 10), date(2024, 6, 20), 'aprovado')])
    criar_servidor(data_nascimento=date(1990, 7, 2))
    criar_servidor(status='inativo')

    response = test_client.get('/api/relatorios/resumo-mensal?mes=6&ano=2024', headers=user_headers)
    assert response.status_code == 200
    assert response.get_json()['data'] == {
        'mes': 6, 'ano': 2024, 'totalServidores': 2, 'feriasNoMes': 1, 'aniversariantes': 1,
    }


def test_servidores_por_setor(test_client, user_headers, criar_servidor):
    criar_servidor(setor='RH')
    criar_servidor(setor='TI')
    criar_servidor(setor='TI')
    response = test_client.get('/api/relatorios/servidores-por-setor', headers=user_headers)
    assert response.get_json()['data'] == [{'setor': 'TI', 'total': 2}, {'setor': 'RH', 'total': 1}]


def test_exportar_json_e_planilha(test_client, user_headers, criar_servidor):
    criar_servidor(nome='Ana', data_nascimento=date(1990, 1, 1))

    response = test_client.get('/api/relatorios/exportar/servidores', headers=user_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['title'] == 'Relatório de Servidores'

    response = test_client.get('/api/relatorios/exportar/servidores?formato=xlsx', headers=user_headers)
    assert response.status_code == 200
    assert response.mimetype == 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    assert 'attachment' in response.headers['Content-Disposition']
    assert response.data[:2] == b'PK'

    response = test_client.get('/api/relatorios/exportar/outra_coisa', headers=user_headers)
    assert response.status_code == 400
