"""Inventory application for the medical device backend.

This package contains models, serializers, views and route registrations
for devices, documents, attachments, fault reports and calibration
notifications.
"""
