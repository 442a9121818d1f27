"""Face Attendance package.

This package is organized by feature modules (users, attendance, timetable, ...)
with a thin Flask controller layer and service/repository layers backed by
DynamoDB, Rekognition and S3 adapters.
"""
