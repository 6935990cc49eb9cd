from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    identity = container.identity

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        identity.sign_in(s_user, remember=bool(data.get("remember_me")))
        return jsonify(
            {
                "id": s_user.user_id,
                "name": s_user.name,
                "email": s_user.email,
                "role": s_user.role,
            }
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        identity.sign_out()
        return "", 204

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    def me():
        actor = identity.require_user()
        s_user = container.auth_service.resolve(actor.user_id)
        return jsonify({"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role})
