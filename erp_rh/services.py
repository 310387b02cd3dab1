# erp_rh/services.py

import requests
from flask import current_app


def enviar_email_via_api(destinatario: str, assunto: str, corpo_html: str):
    """
    Envia um email usando a chave de API e o remetente configurados.
    O payload segue o formato do SendGrid.

    Retorna True se o email foi enviado com sucesso, False caso contrário.
    """
    api_key = current_app.config.get('MAIL_API_KEY')
    remetente = current_app.config.get('MAIL_SENDER')
    if not api_key or not remetente:
        current_app.logger.warning(f"Envio de email para {destinatario} ignorado: credenciais de email não configuradas.")
        return False

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json"
    }
    payload = {
        "personalizations": [{"to": [{"email": destinatario}]}],
        "from": {"email": remetente, "name": current_app.config.get('MAIL_SENDER_NAME', 'ERP RH')},
        "subject": assunto,
        "content": [{"type": "text/html", "value": corpo_html}]
    }

    try:
        response = requests.post(current_app.config['MAIL_API_URL'], headers=headers, json=payload, timeout=10)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        current_app.logger.error(f"Exceção ao tentar enviar email para {destinatario}: {e}")
        return False

    current_app.logger.info(f"Email para {destinatario} enviado (Status: {response.status_code}).")
    return True


def enviar_email_redefinicao(usuario, reset_url):
    corpo = (
        f"<p>Olá, {usuario.name}.</p>"
        f"<p>Para redefinir sua senha, acesse: <a href=\"{reset_url}\">{reset_url}</a></p>"
        "<p>O link expira em 10 minutos.</p>"
    )
    return enviar_email_via_api(usuario.email, 'Redefinição de senha', corpo)
