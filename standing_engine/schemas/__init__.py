"""Pydantic result and response models for the progression engine"""
