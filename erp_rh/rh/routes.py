# erp_rh/rh/routes.py

from flask import Blueprint, request, current_app
from flask_login import login_required
from sqlalchemy import or_
from erp_rh import db
from erp_rh.models_rh import Servidor, Endereco
from erp_rh.decorators import admin_required
from erp_rh.responses import ErrorResponse, sucesso
from .validators import parse_data, is_cpf_valid, exigir_campos
from werkzeug.utils import secure_filename
import json
import os
import re
import time

servidores = Blueprint('servidores', __name__, url_prefix='/api/servidores')
enderecos = Blueprint('enderecos', __name__, url_prefix='/api/enderecos')

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'bmp', 'webp'}

CAMPOS_SERVIDOR = ('nome', 'cargo', 'cpf', 'rg', 'email', 'telefone', 'setor', 'status')
DATAS_SERVIDOR = ('data_nascimento', 'data_admissao', 'data_demissao')
CAMPOS_ENDERECO = ('cep', 'logradouro', 'numero', 'complemento', 'bairro', 'cidade', 'estado', 'pais')

ORDENAVEIS = {
    'id': Servidor.id,
    'nome': Servidor.nome,
    'cargo': Servidor.cargo,
    'setor': Servidor.setor,
    'status': Servidor.status,
    'email': Servidor.email,
    'data_admissao': Servidor.data_admissao,
    'data_nascimento': Servidor.data_nascimento,
    'created_at': Servidor.created_at,
}


def allowed_file(filename):
    return '.' in filename and \
           filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _dados_da_requisicao():
    """Aceita JSON ou multipart (quando vem foto junto)."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return data


def _buscar_servidor(id):
    servidor = db.session.get(Servidor, id)
    if servidor is None:
        raise ErrorResponse('Servidor não encontrado', 404)
    return servidor


def _populate_servidor(servidor, data):
    """Copia para o servidor apenas os campos conhecidos presentes no payload."""
    for campo in CAMPOS_SERVIDOR:
        if campo in data:
            setattr(servidor, campo, data[campo])
    for campo in DATAS_SERVIDOR:
        if campo in data:
            setattr(servidor, campo, parse_data(data[campo], campo))

    if 'nome' in data and not str(data['nome'] or '').strip():
        raise ErrorResponse('O nome não pode ficar vazio', 400)
    if 'cpf' in data and not is_cpf_valid(data['cpf']):
        raise ErrorResponse('CPF inválido. Informe de 11 a 14 caracteres', 400)


def _endereco_do_payload(data):
    endereco = data.get('endereco')
    # Em multipart o endereço chega como texto JSON
    if isinstance(endereco, str):
        try:
            endereco = json.loads(endereco)
        except ValueError:
            raise ErrorResponse('Endereço inválido', 400)
    if endereco is not None and not isinstance(endereco, dict):
        raise ErrorResponse('Endereço inválido', 400)
    return endereco


def _nome_arquivo_foto(servidor, filename):
    ext = filename.rsplit('.', 1)[1].lower()
    nome_limpo = re.sub(r'\s+', '_', (servidor.nome or '').strip().lower())
    nome_limpo = secure_filename(nome_limpo)[:50] or 'servidor'
    sufixo = servidor.id or int(time.time())
    return f"{nome_limpo}_{sufixo}.{ext}"


def _remover_foto(caminho):
    if not caminho or not caminho.startswith('/uploads/'):
        return
    arquivo = os.path.join(current_app.config['UPLOAD_FOLDER'], caminho[len('/uploads/'):])
    if os.path.exists(arquivo):
        os.remove(arquivo)


def _salvar_foto(servidor, file):
    if file.filename == '' or not allowed_file(file.filename):
        raise ErrorResponse('Apenas arquivos de imagem são permitidos', 400)

    filename = _nome_arquivo_foto(servidor, file.filename)
    upload_path = os.path.join(current_app.config['UPLOAD_FOLDER'], 'fotos')
    os.makedirs(upload_path, exist_ok=True)
    file.save(os.path.join(upload_path, filename))

    if servidor.foto and servidor.foto != f'/uploads/fotos/{filename}':
        _remover_foto(servidor.foto)
    servidor.foto = f'/uploads/fotos/{filename}'
    current_app.logger.info(f"Foto do servidor {servidor.id} salva em {servidor.foto}.")


# --- SERVIDORES ---

@servidores.route('/')
@login_required
def listar_servidores():
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', 10, type=int)
    search = request.args.get('search', '').strip()
    sort_by = request.args.get('sortBy', 'nome')
    sort_order = request.args.get('sortOrder', 'ASC').upper()
    status = request.args.get('status')
    setor = request.args.get('setor')

    if page < 1 or limit < 1:
        raise ErrorResponse('Parâmetros de paginação inválidos', 400)
    if sort_by not in ORDENAVEIS:
        raise ErrorResponse('Campo de ordenação inválido', 400, {'campos_validos': list(ORDENAVEIS)})
    if sort_order not in ('ASC', 'DESC'):
        raise ErrorResponse('Ordem inválida. Use ASC ou DESC', 400)

    query = Servidor.query
    if search:
        termo = f'%{search}%'
        query = query.filter(or_(
            Servidor.nome.ilike(termo),
            Servidor.email.ilike(termo),
            Servidor.cargo.ilike(termo)
        ))
    if status:
        query = query.filter(Servidor.status == status)
    if setor:
        query = query.filter(Servidor.setor == setor)

    coluna = ORDENAVEIS[sort_by]
    query = query.order_by(coluna.desc() if sort_order == 'DESC' else coluna.asc(), Servidor.id)
    pagina = query.paginate(page=page, per_page=limit, error_out=False)

    return sucesso({
        'items': [s.to_dict() for s in pagina.items],
        'totalItems': pagina.total,
        'totalPages': pagina.pages,
        'currentPage': page,
        'itemsPerPage': limit
    })


@servidores.route('/<int:id>')
@login_required
def ver_servidor(id):
    servidor = _buscar_servidor(id)
    dados = servidor.to_dict()
    dados['enderecos'] = [e.to_dict() for e in servidor.enderecos]
    return sucesso(dados)


@servidores.route('/', methods=['POST'])
@login_required
@admin_required
def novo_servidor():
    data = _dados_da_requisicao()
    exigir_campos(data, 'nome', 'cargo', 'cpf', 'email', 'setor')
    endereco = _endereco_do_payload(data)

    servidor = Servidor()
    _populate_servidor(servidor, data)
    if Servidor.query.filter_by(cpf=servidor.cpf).first():
        raise ErrorResponse('Já existe um servidor com este CPF', 400)

    db.session.add(servidor)
    db.session.flush()

    if endereco:
        servidor.enderecos.append(Endereco(**{c: endereco[c] for c in CAMPOS_ENDERECO if c in endereco}))
    if 'foto' in request.files:
        _salvar_foto(servidor, request.files['foto'])

    db.session.commit()
    return sucesso(servidor.to_dict(), 'Servidor criado com sucesso', 201)


@servidores.route('/<int:id>', methods=['PUT'])
@login_required
@admin_required
def editar_servidor(id):
    servidor = _buscar_servidor(id)
    data = _dados_da_requisicao()
    endereco = _endereco_do_payload(data)

    if 'cpf' in data and data['cpf'] != servidor.cpf and Servidor.query.filter_by(cpf=data['cpf']).first():
        raise ErrorResponse('Já existe um servidor com este CPF', 400)
    _populate_servidor(servidor, data)

    if endereco:
        if servidor.enderecos:
            atual = servidor.enderecos[0]
            for campo in CAMPOS_ENDERECO:
                if campo in endereco:
                    setattr(atual, campo, endereco[campo])
        else:
            servidor.enderecos.append(Endereco(**{c: endereco[c] for c in CAMPOS_ENDERECO if c in endereco}))
    if 'foto' in request.files:
        _salvar_foto(servidor, request.files['foto'])

    db.session.commit()
    return sucesso(servidor.to_dict(), 'Servidor atualizado com sucesso')


@servidores.route('/<int:id>', methods=['DELETE'])
@login_required
@admin_required
def excluir_servidor(id):
    servidor = _buscar_servidor(id)
    foto = servidor.foto
    # Endereços e férias do servidor são removidos junto (cascade)
    db.session.delete(servidor)
    db.session.commit()
    _remover_foto(foto)
    return sucesso(None, 'Servidor deletado com sucesso')


@servidores.route('/<int:id>/foto', methods=['POST'])
@login_required
@admin_required
def upload_foto(id):
    servidor = _buscar_servidor(id)
    if 'foto' not in request.files:
        raise ErrorResponse('Nenhum arquivo foi enviado', 400)

    _salvar_foto(servidor, request.files['foto'])
    db.session.commit()
    return sucesso(servidor.to_dict(), 'Foto atualizada com sucesso')


# --- ENDEREÇOS ---

def _buscar_endereco(id):
    endereco = db.session.get(Endereco, id)
    if endereco is None:
        raise ErrorResponse('Endereço não encontrado', 404)
    return endereco


@enderecos.route('/')
@login_required
def listar_enderecos():
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', 10, type=int)
    if page < 1 or limit < 1:
        raise ErrorResponse('Parâmetros de paginação inválidos', 400)

    query = Endereco.query
    servidor_id = request.args.get('servidor_id', type=int)
    if servidor_id:
        query = query.filter_by(servidor_id=servidor_id)
    pagina = query.order_by(Endereco.id).paginate(page=page, per_page=limit, error_out=False)
    return sucesso({
        'items': [e.to_dict() for e in pagina.items],
        'totalItems': pagina.total,
        'totalPages': pagina.pages,
        'currentPage': page,
        'itemsPerPage': limit
    })


@enderecos.route('/<int:id>')
@login_required
def ver_endereco(id):
    return sucesso(_buscar_endereco(id).to_dict())


@enderecos.route('/', methods=['POST'])
@login_required
@admin_required
def novo_endereco():
    data = request.get_json(silent=True) or {}
    exigir_campos(data, 'servidor_id')
    _buscar_servidor(data['servidor_id'])

    endereco = Endereco(servidor_id=data['servidor_id'])
    for campo in CAMPOS_ENDERECO:
        if campo in data:
            setattr(endereco, campo, data[campo])
    if not endereco.pais:
        endereco.pais = 'Brasil'

    db.session.add(endereco)
    db.session.commit()
    return sucesso(endereco.to_dict(), 'Endereço criado com sucesso', 201)


@enderecos.route('/<int:id>', methods=['PUT'])
@login_required
@admin_required
def editar_endereco(id):
    endereco = _buscar_endereco(id)
    data = request.get_json(silent=True) or {}

    if 'servidor_id' in data and data['servidor_id'] != endereco.servidor_id:
        _buscar_servidor(data['servidor_id'])
        endereco.servidor_id = data['servidor_id']
    for campo in CAMPOS_ENDERECO:
        if campo in data:
            setattr(endereco, campo, data[campo])

    db.session.commit()
    return sucesso(endereco.to_dict(), 'Endereço atualizado com sucesso')


@enderecos.route('/<int:id>', methods=['DELETE'])
@login_required
@admin_required
def excluir_endereco(id):
    endereco = _buscar_endereco(id)
    db.session.delete(endereco)
    db.session.commit()
    return sucesso(None, 'Endereço deletado com sucesso')
