"""Constantes HTTP pour éviter les valeurs magiques dans le code et les tests.

Ce module définit les codes de statut HTTP utilisés par l'API d'horoscopes.
"""

# Codes de statut HTTP courants
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_NOT_FOUND = 404
HTTP_TOO_MANY_REQUESTS = 429
HTTP_INTERNAL_SERVER_ERROR = 500
