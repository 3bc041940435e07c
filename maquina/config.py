# maquina/config.py
"""
Configurações globais e valores padrão da máquina de vendas.
"""

import os
from dataclasses import dataclass


# Caminho padrão do banco de dados SQLite onde o estado da máquina é salvo
DB_PATH = os.path.join(os.getcwd(), "maquina.db")


@dataclass
class DefaultConfig:
    """Valores padrão para uma máquina recém-criada."""
    schema_version: int = 1       # versão do snapshot serializado
    quantidade_lote: int = 1      # quantidade assumida quando a planilha não informa


# Instância global dos valores padrão
DEFAULTS = DefaultConfig()
