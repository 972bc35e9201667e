import os

from . import create_app


if __name__ == '__main__':
    try:
        port = int(os.environ.get('PORT', 5000))
    except ValueError:
        port = 5000
    create_app().run(host='0.0.0.0', port=port)
