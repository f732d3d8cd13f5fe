from __future__ import annotations

from flask import Flask, session

from ..common.http import json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(
            str(body.get("username") or ""),
            str(body.get("password") or ""),
        )

        session.clear()
        session.permanent = bool(body.get("remember_me"))
        session.update(s_user.to_session())

        return ok({"user": s_user.to_session()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok({"message": "Logged out"})

    @app.route("/api/auth/verify", methods=["GET"], endpoint="verify")
    @login_required
    def verify(user):
        return ok({"user": user.to_session()})
