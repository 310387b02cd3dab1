# create_admin.py

import os
from erp_rh import create_app, db
from erp_rh.models import Usuario

app = create_app()

with app.app_context():
    print("Iniciando a criação do administrador...")

    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', "admin@erprh.local")
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', "senhaSuperForte123")

    admin_user = Usuario.query.filter_by(email=ADMIN_EMAIL).first()

    if not admin_user:
        print(f"Criando usuário administrador com o email: {ADMIN_EMAIL}")

        admin_user = Usuario(
            email=ADMIN_EMAIL,
            name="Administrador",
            role="admin"
        )

        admin_user.set_password(ADMIN_PASSWORD)

        db.session.add(admin_user)
        db.session.commit()

        print("\n=====================================================")
        print("  Administrador criado com sucesso!  ")
        print(f"  Email: {ADMIN_EMAIL}")
        print(f"  Senha: {ADMIN_PASSWORD}")
        print("=====================================================")
    else:
        print("\nO usuário administrador já existe no banco de dados.")
