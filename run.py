# run.py

from erp_rh import create_app
from erp_rh.config import DevelopmentConfig

app = create_app(DevelopmentConfig)

if __name__ == '__main__':
    app.run(debug=True)
