from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        user_id = container.registration_service.register(
            name=data.get("name"),
            email=data.get("email"),
            role=data.get("role"),
            image_base64=data.get("imageBase64"),
        )
        return jsonify({"success": True, "message": "Registration submitted", "userId": user_id})

    @app.route("/admin/pending", methods=["GET"], endpoint="admin_pending")
    def admin_pending():
        pending = container.registration_service.list_pending()
        return jsonify({"success": True, "pending": [u.to_dict(include_photo=True) for u in pending]})

    @app.route("/admin/approve", methods=["POST"], endpoint="admin_approve")
    def admin_approve():
        data = json_body()
        face_id = container.registration_service.approve(
            user_id=data.get("userId"),
            password=data.get("password"),
        )
        return jsonify({"success": True, "message": "User approved and face indexed", "faceId": face_id})

    @app.route("/admin/reject", methods=["POST"], endpoint="admin_reject")
    def admin_reject():
        data = json_body()
        container.registration_service.reject(user_id=data.get("userId"), reason=data.get("reason"))
        return jsonify({"success": True, "message": "User registration rejected"})

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        result = container.auth_service.login(
            user_id=data.get("userId"),
            password=data.get("password"),
            role=data.get("role"),
        )
        return jsonify({"success": True, "message": "Login successful", "userId": result.user_id, "role": result.role})

    @app.route("/auth/verify-face", methods=["POST"], endpoint="auth_verify_face")
    def auth_verify_face():
        data = json_body()
        result = container.auth_service.verify_face(
            user_id=data.get("userId"),
            image_base64=data.get("imageBase64"),
        )
        if result.matched:
            return jsonify({"success": True, "message": "Face matched", "similarity": result.similarity})
        return jsonify({"success": False, "message": "Face not matched"})

    @app.route("/admin/users", methods=["GET"], endpoint="admin_users")
    def admin_users():
        grouped = container.user_service.list_approved()
        return jsonify(
            {
                "success": True,
                "users": {
                    "students": [u.to_dict() for u in grouped["students"]],
                    "teachers": [u.to_dict() for u in grouped["teachers"]],
                    "total": grouped["total"],
                },
            }
        )

    @app.route("/admin/user/<user_id>", methods=["DELETE"], endpoint="admin_delete_user")
    def admin_delete_user(user_id: str):
        container.user_service.remove_user(user_id)
        return jsonify({"success": True, "message": f"User {user_id} removed successfully"})

    @app.route("/admin/teachers", methods=["GET"], endpoint="admin_teachers")
    def admin_teachers():
        return jsonify({"success": True, "teachers": container.user_service.list_teachers()})
