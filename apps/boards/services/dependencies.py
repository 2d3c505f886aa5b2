"""
Collaborators shared by the boards services.

Services receive a BoardDependencies bundle at construction; the
module-level service functions use ``default_dependencies()``.
"""

from dataclasses import dataclass, field

from apps.accounts.services import UserDirectory
from apps.activity.services import ActivitySink
from apps.boards.services.stores import BoardStore, CardStore, ListStore, MembershipStore


@dataclass
class BoardDependencies:
    boards: BoardStore = field(default_factory=BoardStore)
    memberships: MembershipStore = field(default_factory=MembershipStore)
    cards: CardStore = field(default_factory=CardStore)
    lists: ListStore = field(default_factory=ListStore)
    users: UserDirectory = field(default_factory=UserDirectory)
    audit: ActivitySink = field(default_factory=ActivitySink)


def default_dependencies() -> BoardDependencies:
    return BoardDependencies()
