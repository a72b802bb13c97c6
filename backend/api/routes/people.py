"""People endpoints.

Handlers only translate between the wire and the People Access Object:
request shapes arrive already validated, a missing record becomes
``NotFoundError`` and DAO failures propagate to the app exception handlers.
"""

from typing import Annotated

from fastapi import Query, Response

from ...core.exceptions import NotFoundError
from ...schemas import (
    PersonCreate,
    PersonId,
    PersonListQuery,
    PersonListResponse,
    PersonResponse,
    PersonUpdate,
)
from ..contracts import RouteContract, RouteKind
from ..dependencies import PeopleDAODep

ENTITY = "Person"
TAGS = ("people",)


def list_people(
    query: Annotated[PersonListQuery, Query()], dao: PeopleDAODep
) -> PersonListResponse:
    page = dao.find_all(limit=query.limit, offset=query.offset, search=query.search)
    return PersonListResponse(
        data=[PersonResponse.model_validate(person) for person in page.items],
        total=page.total,
        limit=query.limit,
        offset=query.offset,
    )


def get_person(person_id: PersonId, dao: PeopleDAODep) -> PersonResponse:
    person = dao.find_by_id(person_id)
    if person is None:
        raise NotFoundError(ENTITY, person_id)
    return PersonResponse.model_validate(person)


def create_person(payload: PersonCreate, dao: PeopleDAODep) -> PersonResponse:
    return PersonResponse.model_validate(dao.create(payload))


def update_person(
    person_id: PersonId, payload: PersonUpdate, dao: PeopleDAODep
) -> PersonResponse:
    person = dao.update(person_id, payload)
    if person is None:
        raise NotFoundError(ENTITY, person_id)
    return PersonResponse.model_validate(person)


def delete_person(person_id: PersonId, dao: PeopleDAODep) -> Response:
    if not dao.delete(person_id):
        raise NotFoundError(ENTITY, person_id)
    return Response(status_code=204)


PEOPLE_ROUTES = (
    RouteContract(
        path="/people",
        method="GET",
        endpoint=list_people,
        kind=RouteKind.LIST,
        operation_id="listPeople",
        summary="List people",
        description=(
            "One page of people ordered by creation time. `search` matches "
            "first name, last name, email, city or country, case-insensitively."
        ),
        response_model=PersonListResponse,
        error_statuses=frozenset({400, 500}),
        tags=TAGS,
    ),
    RouteContract(
        path="/people/{person_id}",
        method="GET",
        endpoint=get_person,
        kind=RouteKind.GET,
        operation_id="getPerson",
        summary="Get a person by id",
        response_model=PersonResponse,
        error_statuses=frozenset({400, 404, 500}),
        tags=TAGS,
    ),
    RouteContract(
        path="/people",
        method="POST",
        endpoint=create_person,
        kind=RouteKind.CREATE,
        operation_id="createPerson",
        summary="Create a person",
        description="Emails are unique; a duplicate is rejected with 400.",
        response_model=PersonResponse,
        error_statuses=frozenset({400, 500}),
        tags=TAGS,
    ),
    RouteContract(
        path="/people/{person_id}",
        method="PUT",
        endpoint=update_person,
        kind=RouteKind.UPDATE,
        operation_id="updatePerson",
        summary="Update a person",
        description="Only the fields present in the body change.",
        response_model=PersonResponse,
        error_statuses=frozenset({400, 404, 500}),
        tags=TAGS,
    ),
    RouteContract(
        path="/people/{person_id}",
        method="DELETE",
        endpoint=delete_person,
        kind=RouteKind.DELETE,
        operation_id="deletePerson",
        summary="Delete a person",
        error_statuses=frozenset({400, 404, 500}),
        tags=TAGS,
    ),
)

__all__ = [
    "PEOPLE_ROUTES",
    "create_person",
    "delete_person",
    "get_person",
    "list_people",
    "update_person",
]
