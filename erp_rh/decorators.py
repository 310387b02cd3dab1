# erp_rh/decorators.py

from functools import wraps
from flask_login import current_user
from .responses import erro


def role_required(*roles):
    """
    Decorador que restringe o acesso a rotas com base na função do usuário.
    Deve vir depois de @login_required.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return erro('Não autorizado. Faça login para acessar.', 401)

            if current_user.role not in roles:
                return erro(f'Usuário com a função {current_user.role} não está autorizado a acessar esta rota', 403)

            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = role_required('admin')
