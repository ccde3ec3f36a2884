import asyncio

import pytest
from sqlalchemy import func, select

from conftest import create_user
from studymatch.errors import Conflict, Forbidden, NotFound, ValidationError
from studymatch.models import Match, MatchStatus, Notification, NotificationType, RequestStatus, StudyRequest
from studymatch.services.matching import (
    accept_request,
    create_request,
    get_match_for_participant,
    list_matches,
    list_open_requests,
)


async def _count(session, model, *where):
    return (await session.execute(select(func.count()).select_from(model).where(*where))).scalar_one()


@pytest.mark.asyncio
async def test_create_request_notifies_course_peers(async_session):
    alice = await create_user(async_session, "Alice", ["CS 110"])
    bob = await create_user(async_session, "Bob", ["CS 110", "MATH 140"])
    carol = await create_user(async_session, "Carol", ["BIO 111"])

    request, notified = await create_request(async_session, alice, "CS 110", "Midterm review")
    await async_session.commit()

    assert request.status == RequestStatus.PENDING
    assert request.user_id == alice.id
    assert notified == [bob.id]
    notes = (await async_session.execute(select(Notification))).scalars().all()
    assert len(notes) == 1
    assert notes[0].user_id == bob.id
    assert notes[0].type == NotificationType.STUDY_REQUEST
    assert notes[0].related_request_id == request.id
    assert "CS 110" in notes[0].message
    assert await _count(async_session, Notification, Notification.user_id == carol.id) == 0


@pytest.mark.asyncio
async def test_create_request_requires_course_and_description(async_session):
    alice = await create_user(async_session, "Alice")

    with pytest.raises(ValidationError):
        await create_request(async_session, alice, "", "help")
    with pytest.raises(ValidationError):
        await create_request(async_session, alice, "CS 110", "   ")
    with pytest.raises(ValidationError):
        await create_request(async_session, alice, None, None)
    assert await _count(async_session, StudyRequest) == 0


@pytest.mark.asyncio
async def test_accept_request_confirms_match_and_notifies_both(async_session):
    alice = await create_user(async_session, "Alice", ["CS 110"])
    bob = await create_user(async_session, "Bob", ["CS 110"])
    request, _ = await create_request(async_session, alice, "CS 110", "Midterm review")
    await async_session.commit()

    match = await accept_request(async_session, bob, request.id)
    await async_session.commit()

    assert match.status == MatchStatus.CONFIRMED
    assert match.user_id_1 == alice.id
    assert match.user_id_2 == bob.id
    assert match.initiated_by == bob.id
    await async_session.refresh(request)
    assert request.status == RequestStatus.MATCHED
    for user in (alice, bob):
        assert await _count(
            async_session,
            Notification,
            Notification.user_id == user.id,
            Notification.type == NotificationType.MATCH_CONFIRMED,
        ) == 1


@pytest.mark.asyncio
async def test_accept_own_request_is_forbidden(async_session):
    alice = await create_user(async_session, "Alice", ["CS 110"])
    request, _ = await create_request(async_session, alice, "CS 110", "Midterm review")
    await async_session.commit()

    with pytest.raises(Forbidden):
        await accept_request(async_session, alice, request.id)
    await async_session.rollback()

    assert await _count(async_session, Match) == 0
    await async_session.refresh(request)
    assert request.status == RequestStatus.PENDING


@pytest.mark.asyncio
async def test_accept_missing_request(async_session):
    bob = await create_user(async_session, "Bob")
    with pytest.raises(NotFound):
        await accept_request(async_session, bob, 999)


@pytest.mark.asyncio
async def test_accept_matched_request_conflicts(async_session):
    alice = await create_user(async_session, "Alice")
    bob = await create_user(async_session, "Bob")
    carol = await create_user(async_session, "Carol")
    request, _ = await create_request(async_session, alice, "CS 110", "Midterm review")
    await accept_request(async_session, bob, request.id)
    await async_session.commit()

    with pytest.raises(Conflict):
        await accept_request(async_session, carol, request.id)
    assert await _count(async_session, Match) == 1


@pytest.mark.asyncio
async def test_concurrent_accepts_create_one_match(async_session, session_factory):
    alice = await create_user(async_session, "Alice")
    bob = await create_user(async_session, "Bob")
    carol = await create_user(async_session, "Carol")
    request, _ = await create_request(async_session, alice, "CS 110", "Midterm review")
    await async_session.commit()

    async def attempt(user):
        async with session_factory() as session:
            try:
                match = await accept_request(session, user, request.id)
                await session.commit()
                return match
            except Exception:
                await session.rollback()
                raise

    results = await asyncio.gather(attempt(bob), attempt(carol), return_exceptions=True)

    matches = [r for r in results if isinstance(r, Match)]
    conflicts = [r for r in results if isinstance(r, Conflict)]
    assert len(matches) == 1
    assert len(conflicts) == 1
    assert await _count(async_session, Match) == 1
    assert await _count(
        async_session, Notification, Notification.type == NotificationType.MATCH_CONFIRMED
    ) == 2


@pytest.mark.asyncio
async def test_list_open_requests_excludes_own_and_matched(async_session):
    alice = await create_user(async_session, "Alice")
    bob = await create_user(async_session, "Bob")
    carol = await create_user(async_session, "Carol")
    mine, _ = await create_request(async_session, bob, "CS 110", "mine")
    first, _ = await create_request(async_session, alice, "CS 110", "first")
    second, _ = await create_request(async_session, alice, "MATH 140", "second")
    taken, _ = await create_request(async_session, alice, "BIO 111", "taken")
    await accept_request(async_session, carol, taken.id)
    await async_session.commit()

    open_requests = await list_open_requests(async_session, bob)

    assert [r.id for r in open_requests] == [second.id, first.id]


@pytest.mark.asyncio
async def test_list_matches_loads_partners_and_request(async_session):
    alice = await create_user(async_session, "Alice")
    bob = await create_user(async_session, "Bob")
    carol = await create_user(async_session, "Carol")
    request, _ = await create_request(async_session, alice, "CS 110", "Midterm review")
    await accept_request(async_session, bob, request.id)
    await async_session.commit()

    bob_matches = await list_matches(async_session, bob)
    assert len(bob_matches) == 1
    assert bob_matches[0].user1.full_name == "Alice"
    assert bob_matches[0].user2.full_name == "Bob"
    assert bob_matches[0].request.course == "CS 110"
    assert await list_matches(async_session, carol) == []


@pytest.mark.asyncio
async def test_get_match_for_participant(async_session):
    alice = await create_user(async_session, "Alice")
    bob = await create_user(async_session, "Bob")
    carol = await create_user(async_session, "Carol")
    request, _ = await create_request(async_session, alice, "CS 110", "Midterm review")
    match = await accept_request(async_session, bob, request.id)
    await async_session.commit()

    assert (await get_match_for_participant(async_session, alice, match.id)).id == match.id
    with pytest.raises(Forbidden):
        await get_match_for_participant(async_session, carol, match.id)
    with pytest.raises(NotFound):
        await get_match_for_participant(async_session, alice, match.id + 100)
