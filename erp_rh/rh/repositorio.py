# erp_rh/rh/repositorio.py

from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload
from erp_rh import db
from erp_rh.models_rh import Servidor, Ferias
from .registros import ServidorDados, FeriasDados

CAMPOS_AGRUPAVEIS = {
    'setor': Servidor.setor,
    'status': Servidor.status,
    'cargo': Servidor.cargo,
}

ORDENACOES_SERVIDOR = {
    'id': Servidor.id,
    'nome': Servidor.nome,
    'data_nascimento': Servidor.data_nascimento,
    'data_admissao': Servidor.data_admissao,
}

ORDENACOES_FERIAS = {
    'id': Ferias.id,
    'data_inicio': Ferias.data_inicio,
    'data_inicio_desc': Ferias.data_inicio.desc(),
}


class RepositorioRH:
    """Leitura de servidores e férias para os relatórios."""

    def __init__(self, session=None):
        self.session = session or db.session

    def _query_servidores(self, status=None, com_nascimento=False, com_admissao=False):
        query = self.session.query(Servidor)
        if status is not None:
            query = query.filter(Servidor.status == status)
        if com_nascimento:
            query = query.filter(Servidor.data_nascimento.isnot(None))
        if com_admissao:
            query = query.filter(Servidor.data_admissao.isnot(None))
        return query

    def listar_servidores(self, status=None, com_nascimento=False, com_admissao=False, ordem='id'):
        query = self._query_servidores(status, com_nascimento, com_admissao)
        query = query.options(selectinload(Servidor.enderecos))
        query = query.order_by(ORDENACOES_SERVIDOR[ordem], Servidor.id)
        return [ServidorDados.de_modelo(s) for s in query.all()]

    def contar_servidores(self, status=None, com_nascimento=False, com_admissao=False):
        return self._query_servidores(status, com_nascimento, com_admissao).count()

    def contar_por_campo(self, campo, status='ativo'):
        """Contagem agrupada feita pelo banco, empates pela primeira ocorrência."""
        coluna = CAMPOS_AGRUPAVEIS.get(campo)
        if coluna is None:
            raise ValueError(f"Campo não agrupável: {campo}")
        total = func.count(Servidor.id)
        query = self.session.query(coluna, total)
        if status is not None:
            query = query.filter(Servidor.status == status)
        query = query.group_by(coluna).order_by(total.desc(), func.min(Servidor.id))
        return [(valor, quantidade) for valor, quantidade in query.all()]

    def listar_ferias(self, status=None, servidor_id=None, ordem='id'):
        query = self.session.query(Ferias).options(joinedload(Ferias.servidor))
        if status is not None:
            query = query.filter(Ferias.status == status)
        if servidor_id is not None:
            query = query.filter(Ferias.servidor_id == servidor_id)
        query = query.order_by(ORDENACOES_FERIAS[ordem], Ferias.id)
        return [FeriasDados.de_modelo(f) for f in query.all()]
