from datetime import datetime

from larp_briefing.models import (
    EVERYONE,
    DocumentKind,
    DocumentRow,
    OrganizationKind,
    OrganizationRow,
    Priority,
)
from larp_briefing.visibility import (
    documents_for,
    find_character,
    group_by_kind,
    order_documents,
    split_profile_blurb,
    visible_documents,
)

NOW = datetime(2025, 8, 1, 12, 0)

ORGANIZATION = [
    OrganizationRow(kind=OrganizationKind.GROUP, name="Red"),
    OrganizationRow(kind=OrganizationKind.CHARACTER, name="Anna", slug="anna", group="Red"),
    OrganizationRow(kind=OrganizationKind.CHARACTER, name="Boris", slug="boris", group="Blue"),
    OrganizationRow(kind=OrganizationKind.CHARACTER, name="Cyril", slug="cyril", group=""),
]


def _doc(title, recipient=EVERYONE, kind=DocumentKind.IN_GAME, priority=Priority.NORMAL, published_at="2025-07-01"):
    return DocumentRow(
        kind=kind,
        recipient=recipient,
        title=title,
        body="",
        published_at=published_at,
        priority=priority,
    )


def _titles(docs):
    return [doc.title for doc in docs]


def test_find_character_matches_character_rows_only():
    assert find_character(ORGANIZATION, "anna").name == "Anna"
    assert find_character(ORGANIZATION, "nobody") is None
    assert find_character([OrganizationRow(kind=OrganizationKind.GROUP, name="G", slug="g")], "g") is None


def test_visibility_by_slug_group_and_everyone():
    docs = [
        _doc("for all"),
        _doc("for red", recipient="Red"),
        _doc("for anna", recipient="anna"),
        _doc("for boris", recipient="boris"),
    ]

    assert _titles(visible_documents(docs, "anna", ORGANIZATION)) == ["for all", "for red", "for anna"]
    assert _titles(visible_documents(docs, "boris", ORGANIZATION)) == ["for all", "for boris"]
    assert _titles(visible_documents(docs, "nobody", ORGANIZATION)) == ["for all"]


def test_admin_view_sees_only_documents_for_everyone():
    docs = [_doc("for all"), _doc("for red", recipient="Red"), _doc("for anna", recipient="anna")]
    assert _titles(visible_documents(docs, EVERYONE, ORGANIZATION)) == ["for all"]


def test_blank_group_matches_blank_recipient():
    docs = [_doc("for all"), _doc("unaddressed", recipient=""), _doc("for red", recipient="Red")]
    assert _titles(visible_documents(docs, "cyril", ORGANIZATION)) == ["for all", "unaddressed"]
    assert _titles(visible_documents(docs, "nobody", ORGANIZATION)) == ["for all", "unaddressed"]
    assert _titles(visible_documents(docs, "anna", ORGANIZATION)) == ["for all", "for red"]
    assert _titles(visible_documents(docs, EVERYONE, ORGANIZATION)) == ["for all"]


def test_primary_documents_come_first_then_newest():
    docs = [
        _doc("normal new", published_at="2025-07-30"),
        _doc("primary old", priority=Priority.PRIMARY, published_at="2025-01-01"),
        _doc("normal old", published_at="2025-02-01"),
        _doc("primary new", priority=Priority.PRIMARY, published_at="30.7.2025 10:00:00"),
    ]

    assert _titles(order_documents(docs, now=NOW)) == [
        "primary new",
        "primary old",
        "normal new",
        "normal old",
    ]


def test_unparseable_dates_sort_as_now():
    docs = [
        _doc("dated", published_at="2025-07-30"),
        _doc("blank", published_at=""),
        _doc("future", published_at="2026-01-01"),
        _doc("garbage", published_at="???"),
    ]

    assert _titles(order_documents(docs, now=NOW)) == ["future", "blank", "garbage", "dated"]


def test_grouping_keeps_sorted_order_and_omits_empty_kinds():
    docs = order_documents(
        [
            _doc("game 1", published_at="2025-07-01"),
            _doc("rules", kind=DocumentKind.ORGANIZATIONAL, priority=Priority.PRIMARY),
            _doc("game 2", published_at="2025-07-20"),
            _doc("game 3", published_at="2025-07-10"),
        ],
        now=NOW,
    )
    grouped = group_by_kind(docs)

    assert list(grouped) == [DocumentKind.ORGANIZATIONAL, DocumentKind.IN_GAME]
    assert _titles(grouped[DocumentKind.IN_GAME]) == ["game 2", "game 3", "game 1"]
    assert DocumentKind.PROFILE_BLURB not in grouped


def test_documents_for_combines_visibility_order_and_grouping():
    docs = [
        _doc("rumour", recipient="Red", published_at="2025-07-05"),
        _doc("orders", recipient="anna", kind=DocumentKind.CHARACTER_PRIVATE, priority=Priority.PRIMARY),
        _doc("boris only", recipient="boris", kind=DocumentKind.CHARACTER_PRIVATE),
        _doc("map", published_at="2025-07-06"),
    ]
    grouped = documents_for(docs, "anna", ORGANIZATION, now=NOW)

    assert list(grouped) == [DocumentKind.CHARACTER_PRIVATE, DocumentKind.IN_GAME]
    assert _titles(grouped[DocumentKind.CHARACTER_PRIVATE]) == ["orders"]
    assert _titles(grouped[DocumentKind.IN_GAME]) == ["map", "rumour"]


def test_unknown_kinds_form_their_own_group():
    grouped = group_by_kind([_doc("odd", kind="rumour"), _doc("map")])
    assert list(grouped) == ["rumour", DocumentKind.IN_GAME]


def test_split_profile_blurb():
    blurb = _doc("profile", recipient="anna", kind=DocumentKind.PROFILE_BLURB)
    others = [_doc("map"), _doc("orders", recipient="anna", kind=DocumentKind.CHARACTER_PRIVATE)]

    found, rest = split_profile_blurb([others[0], blurb, others[1]])
    assert found == blurb
    assert rest == others

    assert split_profile_blurb(others) == (None, others)
