from types import SimpleNamespace

from factories import make_message
from turftrack.services.conversations import aggregate_conversations

ME = 1
SELLER = 2
OTHER_BUYER = 3


def _listings(*ids):
    return {listing_id: SimpleNamespace(id=listing_id, to_dict=lambda listing_id=listing_id: {"id": listing_id}) for listing_id in ids}


def test_reply_and_question_collapse_into_one_conversation():
    # Newest first: I replied after the seller wrote to me.
    messages = [
        make_message(2, listing_id=10, sender_id=ME, receiver_id=SELLER, sender_name="Me"),
        make_message(1, listing_id=10, sender_id=SELLER, receiver_id=ME, sender_name="Sam Seller"),
    ]
    conversations = aggregate_conversations(messages, ME, _listings(10))
    assert len(conversations) == 1
    conversation = conversations[0]
    assert conversation.listing_id == 10
    assert conversation.other_user_id == SELLER
    assert conversation.last_message.id == 2
    assert conversation.other_user_name == "Sam Seller"


def test_counterparty_name_never_uses_my_own_name():
    messages = [make_message(1, listing_id=10, sender_id=ME, receiver_id=SELLER, sender_name="Me")]
    conversation = aggregate_conversations(messages, ME, _listings(10))[0]
    assert conversation.other_user_name is None


def test_same_pair_on_different_listings_are_separate():
    messages = [
        make_message(2, listing_id=11, sender_id=SELLER, receiver_id=ME),
        make_message(1, listing_id=10, sender_id=SELLER, receiver_id=ME),
    ]
    conversations = aggregate_conversations(messages, ME, _listings(10, 11))
    assert [(c.listing_id, c.other_user_id) for c in conversations] == [(11, SELLER), (10, SELLER)]


def test_different_counterparties_on_same_listing_are_separate():
    messages = [
        make_message(3, listing_id=10, sender_id=OTHER_BUYER, receiver_id=ME, sender_name="Bo"),
        make_message(2, listing_id=10, sender_id=SELLER, receiver_id=ME, sender_name="Sam"),
    ]
    conversations = aggregate_conversations(messages, ME, _listings(10))
    assert {c.other_user_id: c.other_user_name for c in conversations} == {OTHER_BUYER: "Bo", SELLER: "Sam"}


def test_unread_count_only_counts_unread_messages_from_counterparty():
    messages = [
        make_message(5, listing_id=10, sender_id=SELLER, receiver_id=ME, is_read=False),
        make_message(4, listing_id=10, sender_id=ME, receiver_id=SELLER, is_read=False),
        make_message(3, listing_id=10, sender_id=SELLER, receiver_id=ME, is_read=True),
        make_message(2, listing_id=10, sender_id=SELLER, receiver_id=ME, is_read=False),
        make_message(1, listing_id=11, sender_id=SELLER, receiver_id=ME, is_read=False),
    ]
    conversations = {c.listing_id: c for c in aggregate_conversations(messages, ME, _listings(10, 11))}
    assert conversations[10].unread_count == 2
    assert conversations[11].unread_count == 1


def test_missing_listing_drops_the_conversation():
    messages = [
        make_message(2, listing_id=99, sender_id=SELLER, receiver_id=ME),
        make_message(1, listing_id=10, sender_id=SELLER, receiver_id=ME),
    ]
    conversations = aggregate_conversations(messages, ME, _listings(10))
    assert [c.listing_id for c in conversations] == [10]


def test_empty_inbox():
    assert aggregate_conversations([], ME, {}) == []


def test_summary_serializes():
    messages = [make_message(1, listing_id=10, sender_id=SELLER, receiver_id=ME, sender_name="Sam")]
    data = aggregate_conversations(messages, ME, _listings(10))[0].to_dict()
    assert data == {
        "listing_id": 10,
        "listing": {"id": 10},
        "other_user_id": SELLER,
        "other_user_name": "Sam",
        "last_message": {"id": 1},
        "unread_count": 1,
    }
