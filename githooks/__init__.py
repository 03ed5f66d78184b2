"""
git-hooks - Managed Git hooks

Ferramenta que encontra repositórios com core.hooksPath sobrescrito
localmente e remove o override, devolvendo o controle ao diretório de
hooks gerenciado.
"""

from .__version__ import __version__

__all__ = ["__version__"]
