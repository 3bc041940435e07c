# app.py
"""
Entrypoint da aplicação.

Uso:
  python app.py migrate --db maquina.db
  python app.py adicionar coke --quantidade 3
  python app.py inserir 2000
  python app.py compraveis
  python app.py comprar 1
  python app.py historico
"""

from maquina.adapters.cli import main

if __name__ == "__main__":
    main()
