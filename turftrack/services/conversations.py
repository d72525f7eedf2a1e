from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class ConversationSummary:
    listing_id: int
    listing: Any
    other_user_id: int
    other_user_name: Optional[str]
    last_message: Any
    unread_count: int = 0

    def to_dict(self):
        return {
            "listing_id": self.listing_id,
            "listing": self.listing.to_dict(),
            "other_user_id": self.other_user_id,
            "other_user_name": self.other_user_name,
            "last_message": self.last_message.to_dict(),
            "unread_count": self.unread_count,
        }


def aggregate_conversations(messages: Iterable[Any], user_id, listings: Dict[int, Any]) -> List[ConversationSummary]:
    """Collapse a user's messages (newest first) into one summary per listing and counterparty.

    Groups whose listing is not in ``listings`` are dropped.
    """
    groups = {}
    for msg in messages:
        other_user_id = msg.receiver_id if msg.sender_id == user_id else msg.sender_id
        key = (msg.listing_id, other_user_id)
        summary = groups.get(key)
        if summary is None:
            summary = ConversationSummary(
                listing_id=msg.listing_id,
                listing=None,
                other_user_id=other_user_id,
                other_user_name=None,
                last_message=msg,
            )
            groups[key] = summary

        if msg.sender_id == other_user_id:
            if summary.other_user_name is None:
                summary.other_user_name = msg.sender_name
            if msg.receiver_id == user_id and not msg.is_read:
                summary.unread_count += 1

    conversations = []
    for summary in groups.values():
        listing = listings.get(summary.listing_id)
        if listing is None:
            continue
        summary.listing = listing
        conversations.append(summary)
    return conversations
