"""Конфигурация проекта GST Bill Check."""
