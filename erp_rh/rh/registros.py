# erp_rh/rh/registros.py

"""Registros imutáveis lidos do banco para os relatórios.

Os relatórios nunca recebem os objetos do ORM: o repositório converte cada
linha num destes registros congelados, e o payload de saída é montado por
seleção explícita de campos.
"""

from dataclasses import dataclass, asdict
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ServidorDados:
    id: int
    nome: str
    cargo: str
    setor: str
    status: str
    email: Optional[str] = None
    cpf: Optional[str] = None
    telefone: Optional[str] = None
    data_nascimento: Optional[date] = None
    data_admissao: Optional[date] = None
    data_demissao: Optional[date] = None
    cidade: Optional[str] = None
    foto: Optional[str] = None

    @classmethod
    def de_modelo(cls, servidor):
        return cls(
            id=servidor.id,
            nome=servidor.nome,
            cargo=servidor.cargo,
            setor=servidor.setor,
            status=servidor.status,
            email=servidor.email,
            cpf=servidor.cpf,
            telefone=servidor.telefone,
            data_nascimento=servidor.data_nascimento,
            data_admissao=servidor.data_admissao,
            data_demissao=servidor.data_demissao,
            cidade=servidor.cidade,
            foto=servidor.foto,
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class FeriasDados:
    id: int
    servidor_id: int
    data_inicio: date
    data_fim: date
    dias: int
    ano_referencia: int
    status: str
    observacoes: Optional[str] = None
    servidor_nome: Optional[str] = None
    setor: Optional[str] = None

    @classmethod
    def de_modelo(cls, ferias):
        servidor = ferias.servidor
        return cls(
            id=ferias.id,
            servidor_id=ferias.servidor_id,
            data_inicio=ferias.data_inicio,
            data_fim=ferias.data_fim,
            dias=ferias.dias,
            ano_referencia=ferias.ano_referencia,
            status=ferias.status,
            observacoes=ferias.observacoes,
            servidor_nome=servidor.nome if servidor else None,
            setor=servidor.setor if servidor else None,
        )

    def to_dict(self):
        return asdict(self)
