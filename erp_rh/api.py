# erp_rh/api.py

from datetime import datetime
from flask import Blueprint, current_app, jsonify, send_from_directory

bp = Blueprint('api', __name__, url_prefix='/api')
uploads = Blueprint('uploads', __name__)


@bp.route('/test')
def test():
    """Verificação simples de que a API está no ar."""
    return jsonify({
        'success': True,
        'message': 'API funcionando!',
        'timestamp': datetime.now().isoformat(timespec='seconds')
    })


@uploads.route('/uploads/<path:filename>')
def arquivo_enviado(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
