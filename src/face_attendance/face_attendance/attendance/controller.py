from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/teacher/generate-qr", methods=["POST"], endpoint="teacher_generate_qr")
    def teacher_generate_qr():
        data = json_body()
        generated = service.generate_session(teacher_id=data.get("teacherId"), class_id=data.get("classId"))
        return jsonify(
            {
                "success": True,
                "qrData": generated.qr_data,
                "sessionId": generated.session.session_id,
                "expireAt": generated.session.expire_at,
            }
        )

    @app.route("/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        """Mark attendance for a student whose face is (or is being) verified."""
        data = json_body()
        service.mark_by_face(
            user_id=data.get("userId"),
            session_id=data.get("sessionId"),
            image_base64=data.get("imageBase64"),
        )
        return jsonify({"success": True, "message": "Attendance marked"})

    @app.route("/student/scan-qr", methods=["POST"], endpoint="student_scan_qr")
    def student_scan_qr():
        data = json_body()
        _, session = service.mark_by_qr(
            user_id=data.get("userId"),
            qr_data=data.get("qrData"),
            camera_type=data.get("cameraType"),
        )
        return jsonify(
            {
                "success": True,
                "message": "Attendance marked successfully via QR scan",
                "classId": session.class_id,
            }
        )

    @app.route("/teacher/submit-attendance", methods=["POST"], endpoint="teacher_submit_attendance")
    def teacher_submit_attendance():
        data = json_body()
        result = service.submit_manual(
            teacher_id=data.get("teacherId"),
            class_id=data.get("classId"),
            present_students=data.get("presentStudents"),
            session_id=data.get("sessionId"),
        )
        return jsonify(
            {
                "success": True,
                "message": f"Attendance marked for {result.present_count} students",
                "presentCount": result.present_count,
                "failed": result.failed,
                "sessionId": result.session_id,
            }
        )

    @app.route("/teacher/attendance/<class_id>", methods=["GET"], endpoint="teacher_attendance")
    def teacher_attendance(class_id: str):
        return jsonify({"success": True, "attendance": service.class_attendance(class_id)})

    @app.route("/teacher/students/<class_id>", methods=["GET"], endpoint="teacher_students")
    def teacher_students(class_id: str):
        roster = service.class_roster(class_id)
        return jsonify({"success": True, **roster})
