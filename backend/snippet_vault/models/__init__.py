from snippet_vault.models.snippet import Snippet

__all__ = ["Snippet"]
