"""Feed listing and search tests."""

from notefeed.core.services import QueryService


async def _seed(make_note, user, count):
    return [await make_note(user.id, title=f"Note number {i}") for i in range(count)]


async def test_pagination_and_has_next(test_session, test_user, make_note):
    created = await _seed(make_note, test_user, 7)
    service = QueryService(test_session)

    first = await service.list_notes(page=1, per_page=5)
    second = await service.list_notes(page=2, per_page=5)

    assert first.total_items == 7
    assert first.has_next is True
    assert len(first.notes) == 5
    assert first.notes[0].id == created[-1].id
    assert first.notes[0].creator.name == "Max"

    assert second.has_next is False
    assert second.current_page == 2
    assert [n.id for n in second.notes] == [created[1].id, created[0].id]


async def test_default_and_bounded_page_size(test_session, test_user, make_note):
    await _seed(make_note, test_user, 6)
    service = QueryService(test_session)

    default = await service.list_notes()
    assert default.per_page == 5
    assert len(default.notes) == 5

    clamped = await service.list_notes(page=0, per_page=1000)
    assert clamped.current_page == 1
    assert clamped.per_page == 100


async def test_empty_feed(test_session):
    feed = await QueryService(test_session).list_notes(page=1, per_page=5)

    assert feed.notes == []
    assert feed.total_items == 0
    assert feed.has_next is False


async def test_listing_is_served_from_cache_until_invalidated(
    test_session, test_user, make_note, fake_cache
):
    await _seed(make_note, test_user, 2)
    service = QueryService(test_session, cache=fake_cache)

    first = await service.list_notes(page=1, per_page=5)
    assert (1, 5) in fake_cache.pages

    await make_note(test_user.id, title="Not yet visible")
    cached = await service.list_notes(page=1, per_page=5)
    assert cached.total_items == first.total_items == 2

    await fake_cache.invalidate()
    fresh = await service.list_notes(page=1, per_page=5)
    assert fresh.total_items == 3


async def test_cache_failure_falls_back_to_database(
    test_session, test_user, make_note, failing_collaborators
):
    _, cache, _ = failing_collaborators
    await _seed(make_note, test_user, 2)

    feed = await QueryService(test_session, cache=cache).list_notes(page=1, per_page=5)
    assert feed.total_items == 2


async def test_search_ignores_case(test_session, test_user, make_note):
    match = await make_note(test_user.id, title="Hello World", content="Some content")
    await make_note(test_user.id, title="Goodbye", content="Some content")

    result = await QueryService(test_session).search_notes("hello", page=1, per_page=5)

    assert result.search_text == "hello"
    assert result.total_items == 1
    assert result.notes[0].id == match.id
    assert result.has_next is False


async def test_search_without_text_lists_everything(test_session, test_user, make_note):
    await _seed(make_note, test_user, 3)

    result = await QueryService(test_session).search_notes(None, page=1, per_page=2)
    assert result.total_items == 3
    assert result.has_next is True


async def test_page_read_before_a_write_is_not_cached(
    test_session, test_user, make_note, fake_cache, note_service
):
    await make_note(test_user.id)
    service = QueryService(test_session, cache=fake_cache)
    list_from_db = service.note_repo.list_notes

    async def list_then_write(page, per_page):
        result = await list_from_db(page, per_page)
        service.note_repo.list_notes = list_from_db
        await note_service.create_note(test_user.id, "Written meanwhile", "Some content")
        return result

    service.note_repo.list_notes = list_then_write

    during = await service.list_notes(page=1, per_page=5)
    assert during.total_items == 1
    assert fake_cache.pages == {}

    after = await service.list_notes(page=1, per_page=5)
    assert after.total_items == 2
