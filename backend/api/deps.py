from fastapi import Request

from core.config import Settings
from services.flutterwave import FlutterwaveClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_flutterwave(request: Request) -> FlutterwaveClient:
    return request.app.state.flutterwave
