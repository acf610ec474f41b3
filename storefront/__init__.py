"""
FreshBox storefront: assemblage de commande et orchestration du paiement.
"""
