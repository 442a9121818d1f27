from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.timetable_service

    @app.route("/admin/timetable", methods=["POST"], endpoint="admin_timetable_upsert")
    def admin_timetable_upsert():
        data = json_body()
        timetable_id = service.upsert_entry(
            class_id=data.get("classId"),
            class_name=data.get("className"),
            teacher_id=data.get("teacherId"),
            teacher_name=data.get("teacherName"),
            day_of_week=data.get("dayOfWeek"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
            subject=data.get("subject"),
            room=data.get("room"),
        )
        return jsonify({"success": True, "message": "Timetable entry created/updated", "timetableId": timetable_id})

    @app.route("/admin/timetables", methods=["GET"], endpoint="admin_timetables")
    def admin_timetables():
        return jsonify({"success": True, "timetables": [e.to_dict() for e in service.list_active()]})

    @app.route("/admin/timetable/<timetable_id>", methods=["DELETE"], endpoint="admin_timetable_delete")
    def admin_timetable_delete(timetable_id: str):
        service.delete_entry(timetable_id)
        return jsonify({"success": True, "message": "Timetable entry deleted"})

    @app.route("/student/classes/<user_id>", methods=["GET"], endpoint="student_classes")
    def student_classes(user_id: str):
        return jsonify({"success": True, **service.student_classes_today(user_id)})

    @app.route("/teacher/classes/<teacher_id>", methods=["GET"], endpoint="teacher_classes_today")
    def teacher_classes_today(teacher_id: str):
        return jsonify({"success": True, **service.teacher_classes_today(teacher_id)})

    @app.route("/teacher/my-classes/<teacher_id>", methods=["GET"], endpoint="teacher_my_classes")
    def teacher_my_classes(teacher_id: str):
        return jsonify({"success": True, "classes": [e.to_dict() for e in service.teacher_classes(teacher_id)]})

    @app.route("/admin/assign-teacher", methods=["POST"], endpoint="admin_assign_teacher")
    def admin_assign_teacher():
        data = json_body()
        name = service.assign_teacher(
            timetable_id=data.get("timetableId"),
            teacher_id=data.get("teacherId"),
            teacher_name=data.get("teacherName"),
        )
        return jsonify({"success": True, "message": f"Teacher {name} assigned to class successfully"})

    @app.route("/admin/teacher-assignments", methods=["GET"], endpoint="admin_teacher_assignments")
    def admin_teacher_assignments():
        return jsonify({"success": True, "assignments": service.teacher_assignments()})

    @app.route("/admin/classes-with-teachers", methods=["GET"], endpoint="admin_classes_with_teachers")
    def admin_classes_with_teachers():
        return jsonify({"success": True, "classes": service.classes_with_teachers()})
