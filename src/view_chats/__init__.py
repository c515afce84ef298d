"""view_chats: listagem paginada e busca de sessões de chat."""

__version__ = "0.1.0"
