"""RFID classroom attendance package.

Feature modules (teachers, classrooms, schedules, attendance) each expose a
domain model, a repository Protocol with MySQL and in-memory backends, a
service layer and a thin Flask controller.
"""
