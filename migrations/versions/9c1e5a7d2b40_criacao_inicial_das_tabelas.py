"""Criação inicial das tabelas

Revision ID: 9c1e5a7d2b40
Revises: 
Create Date: 2026-10-19 10:12:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '9c1e5a7d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # 1. Usuários do sistema
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('reset_password_token', sa.String(length=64), nullable=True),
        sa.Column('reset_password_expire', sa.DateTime(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_reset_password_token'), 'users', ['reset_password_token'], unique=False)

    # 2. Servidores
    op.create_table('servidores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('nome', sa.String(length=255), nullable=False),
        sa.Column('cargo', sa.String(length=255), nullable=False),
        sa.Column('cpf', sa.String(length=14), nullable=False),
        sa.Column('rg', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('telefone', sa.String(length=20), nullable=True),
        sa.Column('setor', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('data_nascimento', sa.Date(), nullable=True),
        sa.Column('data_admissao', sa.Date(), nullable=True),
        sa.Column('data_demissao', sa.Date(), nullable=True),
        sa.Column('foto', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cpf')
    )

    # 3. Tabelas que dependem de 'servidores'
    op.create_table('enderecos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('servidor_id', sa.Integer(), nullable=False),
        sa.Column('cep', sa.String(length=10), nullable=True),
        sa.Column('logradouro', sa.String(length=255), nullable=True),
        sa.Column('numero', sa.String(length=10), nullable=True),
        sa.Column('complemento', sa.String(length=255), nullable=True),
        sa.Column('bairro', sa.String(length=255), nullable=True),
        sa.Column('cidade', sa.String(length=255), nullable=True),
        sa.Column('estado', sa.String(length=2), nullable=True),
        sa.Column('pais', sa.String(length=100), nullable=True),
        sa.ForeignKeyConstraint(['servidor_id'], ['servidores.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('ferias',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('servidor_id', sa.Integer(), nullable=False),
        sa.Column('data_inicio', sa.Date(), nullable=False),
        sa.Column('data_fim', sa.Date(), nullable=False),
        sa.Column('dias', sa.Integer(), nullable=False),
        sa.Column('ano_referencia', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('observacoes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['servidor_id'], ['servidores.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('ferias')
    op.drop_table('enderecos')
    op.drop_table('servidores')
    op.drop_index(op.f('ix_users_reset_password_token'), table_name='users')
    op.drop_table('users')
