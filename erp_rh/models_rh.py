# erp_rh/models_rh.py

from erp_rh import db
from erp_rh.models import BaseModel


class Servidor(BaseModel):
    __tablename__ = 'servidores'
    nome = db.Column(db.String(255), nullable=False)
    cargo = db.Column(db.String(255), nullable=False)
    cpf = db.Column(db.String(14), unique=True, nullable=False)
    rg = db.Column(db.String(20), nullable=True)
    email = db.Column(db.String(255), nullable=False)
    telefone = db.Column(db.String(20), nullable=True)
    setor = db.Column(db.String(255), nullable=False)
    # Qualquer texto é aceito; 'ativo' e 'inativo' são os valores usados nos relatórios
    status = db.Column(db.String(20), nullable=False, default='ativo')
    data_nascimento = db.Column(db.Date, nullable=True)
    data_admissao = db.Column(db.Date, nullable=True)
    data_demissao = db.Column(db.Date, nullable=True)
    foto = db.Column(db.String(255), nullable=True)

    enderecos = db.relationship('Endereco', backref='servidor', lazy=True,
                                cascade="all, delete-orphan",
                                order_by='Endereco.id')
    ferias = db.relationship('Ferias', backref='servidor', lazy=True,
                             cascade="all, delete-orphan",
                             order_by='Ferias.data_inicio')

    @property
    def cidade(self):
        """Cidade do primeiro endereço cadastrado."""
        return self.enderecos[0].cidade if self.enderecos else None

    def to_dict(self):
        return {
            'id': self.id,
            'nome': self.nome,
            'cargo': self.cargo,
            'cpf': self.cpf,
            'rg': self.rg,
            'email': self.email,
            'telefone': self.telefone,
            'setor': self.setor,
            'status': self.status,
            'data_nascimento': self.data_nascimento,
            'data_admissao': self.data_admissao,
            'data_demissao': self.data_demissao,
            'foto': self.foto,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


class Endereco(BaseModel):
    __tablename__ = 'enderecos'
    servidor_id = db.Column(db.Integer, db.ForeignKey('servidores.id', ondelete='CASCADE'), nullable=False)
    cep = db.Column(db.String(10), nullable=True)
    logradouro = db.Column(db.String(255), nullable=True)
    numero = db.Column(db.String(10), nullable=True)
    complemento = db.Column(db.String(255), nullable=True)
    bairro = db.Column(db.String(255), nullable=True)
    cidade = db.Column(db.String(255), nullable=True)
    estado = db.Column(db.String(2), nullable=True)
    pais = db.Column(db.String(100), nullable=True, default='Brasil')

    def to_dict(self):
        return {
            'id': self.id,
            'servidor_id': self.servidor_id,
            'cep': self.cep,
            'logradouro': self.logradouro,
            'numero': self.numero,
            'complemento': self.complemento,
            'bairro': self.bairro,
            'cidade': self.cidade,
            'estado': self.estado,
            'pais': self.pais,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


class Ferias(BaseModel):
    __tablename__ = 'ferias'
    servidor_id = db.Column(db.Integer, db.ForeignKey('servidores.id', ondelete='CASCADE'), nullable=False)
    data_inicio = db.Column(db.Date, nullable=False)
    data_fim = db.Column(db.Date, nullable=False)
    dias = db.Column(db.Integer, nullable=False)
    ano_referencia = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default='programadas')
    observacoes = db.Column(db.Text, nullable=True)

    def to_dict(self, incluir_servidor=False):
        dados = {
            'id': self.id,
            'servidor_id': self.servidor_id,
            'data_inicio': self.data_inicio,
            'data_fim': self.data_fim,
            'dias': self.dias,
            'ano_referencia': self.ano_referencia,
            'status': self.status,
            'observacoes': self.observacoes,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
        if incluir_servidor and self.servidor is not None:
            dados['servidor'] = {
                'id': self.servidor.id,
                'nome': self.servidor.nome,
                'setor': self.servidor.setor,
            }
        return dados
