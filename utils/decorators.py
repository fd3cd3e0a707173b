from __future__ import annotations
from functools import wraps
from flask import request, g, abort, current_app
from models import storage
from models.account_store import AccountStore
from utils.exceptions import Unauthorized


def jwt_required():
    """Require a valid bearer access token; sets g.current_account."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth = request.headers.get("Authorization", "")
            if not auth.startswith("Bearer "):
                abort(401, description="Missing or invalid Authorization header")
            token = auth.split(" ", 1)[1].strip()
            try:
                decoded = current_app.extensions["token_signer"].decode(token)
            except Unauthorized as e:
                abort(401, description=e.message)

            account = AccountStore(storage).find_by_id(decoded.get("sub"))
            if not account:
                abort(401, description="Account not found")
            g.current_account = account
            return fn(*args, **kwargs)

        return wrapper

    return decorator
