from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel import Session

from coraserver.core.config import Settings
from coraserver.core.db import engine
from coraserver.services.microsoft_oauth import MicrosoftOAuthClient
from coraserver.services.protocols import TimetableGatewayProtocol
from coraserver.services.timetable import SqlTimetableGateway


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_oauth_client(request: Request) -> MicrosoftOAuthClient:
    """OAuth client built from the config loaded at startup."""
    return request.app.state.oauth_client


def get_timetable_gateway(session: SessionDep) -> TimetableGatewayProtocol:
    return SqlTimetableGateway(session)


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
OAuthClientDep = Annotated[MicrosoftOAuthClient, Depends(get_oauth_client)]
TimetableGatewayDep = Annotated[TimetableGatewayProtocol, Depends(get_timetable_gateway)]
