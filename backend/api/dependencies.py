"""FastAPI dependencies shared by route handlers."""

from typing import Annotated

from fastapi import Depends, Request

from ..repositories import PeopleDAO


def get_people_dao(request: Request) -> PeopleDAO:
    """People Access Object built by ``create_app``."""
    return request.app.state.people_dao


PeopleDAODep = Annotated[PeopleDAO, Depends(get_people_dao)]

__all__ = ["PeopleDAODep", "get_people_dao"]
