"""
Taxonomie d'erreurs de la boutique.

- ValidationError: saisie invalide, récupérable, bloque avant tout appel réseau (400).
- ConfigurationError: identifiants manquants, échec fermé avec message générique (500).
- UpstreamError: passerelle/canal de notification en échec ou réponse malformée (500).
- NetworkError: requête impossible à compléter, traitée comme UpstreamError côté client.

Le détail (detail) est destiné aux logs serveur uniquement; seul public_message
est renvoyé à l'appelant.
"""
from typing import Optional


class StorefrontError(Exception):
    status_code = 500
    public_message = "Internal error"

    def __init__(self, detail: str = "", public_message: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail
        if public_message is not None:
            self.public_message = public_message


class ValidationError(StorefrontError):
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        # Les messages de validation sont montrés tels quels à l'utilisateur
        super().__init__(detail=message, public_message=message)
        self.field = field


class ConfigurationError(StorefrontError):
    pass


class UpstreamError(StorefrontError):
    def __init__(self, detail: str = "", public_message: Optional[str] = None, status: Optional[int] = None):
        super().__init__(detail=detail, public_message=public_message)
        self.upstream_status = status


class NetworkError(UpstreamError):
    pass
