from donors.services.tokens import issue_token


def bearer(identity) -> dict:
    """Authorization header kwargs for an APIClient call as ``identity``."""
    return {'HTTP_AUTHORIZATION': f'Bearer {issue_token(identity.pk, identity.role)}'}
