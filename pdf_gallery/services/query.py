# pdf_gallery/services/query.py
"""Access-controlled query construction for the PDF list.

``build_query`` turns the caller's id and the raw list parameters into a
``QuerySpec``: a plain description of which PDFs the caller may see, which of
those match the search and date filters, and how to order them. Nothing here
touches the database. ``PdfRepository.find`` translates a spec into SQL and
``QuerySpec.matches`` / ``QuerySpec.order`` evaluate the same rules in memory.

Visibility: a caller sees their own PDFs plus every public PDF. The
``private`` filter narrows that to the caller's own non-public PDFs; ``all``
and ``public`` both use the full visibility rule.
"""
import calendar
import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import FrozenSet, Iterable, List, Optional, Tuple

from ..utils.tags import split_search_terms


class SearchField(str, enum.Enum):
    ALL = "all"
    TITLE = "title"
    DESCRIPTION = "description"
    TAGS = "tags"


class SortOrder(str, enum.Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    NAME = "name"
    SIZE = "size"


class VisibilityFilter(str, enum.Enum):
    ALL = "all"
    PUBLIC = "public"
    PRIVATE = "private"


class DateFilter(str, enum.Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


# Older clients send searchBy=name for a title search
SEARCH_FIELD_ALIASES = {"name": SearchField.TITLE}

TEXT_FIELDS = {
    SearchField.ALL: frozenset({SearchField.TITLE, SearchField.DESCRIPTION, SearchField.TAGS}),
    SearchField.TITLE: frozenset({SearchField.TITLE}),
    SearchField.DESCRIPTION: frozenset({SearchField.DESCRIPTION}),
    SearchField.TAGS: frozenset({SearchField.TAGS}),
}


def _parse_choice(enum_cls, value, default, aliases=None):
    """Map a raw query value onto an enum member, falling back to the default"""
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    value = str(value).strip().lower()
    if aliases and value in aliases:
        return aliases[value]
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class ListParams:
    search: str = ""
    search_by: SearchField = SearchField.ALL
    sort: SortOrder = SortOrder.NEWEST
    filter: VisibilityFilter = VisibilityFilter.ALL
    date_filter: DateFilter = DateFilter.ALL

    @classmethod
    def parse(cls, search=None, search_by=None, sort=None, filter=None, date_filter=None) -> "ListParams":
        return cls(
            search=(search or "").strip(),
            search_by=_parse_choice(SearchField, search_by, SearchField.ALL, SEARCH_FIELD_ALIASES),
            sort=_parse_choice(SortOrder, sort, SortOrder.NEWEST),
            filter=_parse_choice(VisibilityFilter, filter, VisibilityFilter.ALL),
            date_filter=_parse_choice(DateFilter, date_filter, DateFilter.ALL),
        )


@dataclass(frozen=True)
class Visibility:
    owner_id: int
    include_public: bool = True
    private_only: bool = False


@dataclass(frozen=True)
class TextMatch:
    text: str
    fields: FrozenSet[SearchField]
    tag_terms: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool


SORT_KEYS = {
    SortOrder.NEWEST: SortKey("created_at", descending=True),
    SortOrder.OLDEST: SortKey("created_at", descending=False),
    SortOrder.NAME: SortKey("title", descending=False),
    SortOrder.SIZE: SortKey("file_size", descending=True),
}


@dataclass(frozen=True)
class QuerySpec:
    visibility: Visibility
    text: Optional[TextMatch] = None
    created_after: Optional[datetime] = None
    sort: SortKey = field(default_factory=lambda: SORT_KEYS[SortOrder.NEWEST])

    def matches(self, record) -> bool:
        """Evaluate the predicate against any object with PdfDocument's attributes."""
        owned = record.owner_id == self.visibility.owner_id
        if self.visibility.private_only:
            if not owned or record.is_public:
                return False
        elif not (owned or (self.visibility.include_public and record.is_public)):
            return False

        if self.created_after is not None and record.created_at < self.created_after:
            return False

        if self.text is not None and not self._matches_text(record):
            return False

        return True

    def _matches_text(self, record) -> bool:
        needle = self.text.text.lower()
        if SearchField.TITLE in self.text.fields and needle in (record.title or "").lower():
            return True
        if SearchField.DESCRIPTION in self.text.fields and needle in (record.description or "").lower():
            return True
        if SearchField.TAGS in self.text.fields:
            terms = [term.lower() for term in self.text.tag_terms]
            for tag in record.tags:
                if any(term in tag.lower() for term in terms):
                    return True
        return False

    def order(self, records: Iterable) -> List:
        """Sort records the way the SQL adapter does: sort key first, then id ascending"""
        ordered = sorted(records, key=lambda r: r.id)
        ordered.sort(key=lambda r: getattr(r, self.sort.field), reverse=self.sort.descending)
        return ordered

    def apply(self, records: Iterable) -> List:
        return self.order(r for r in records if self.matches(r))


def one_month_before(moment: datetime) -> datetime:
    if moment.month == 1:
        year, month = moment.year - 1, 12
    else:
        year, month = moment.year, moment.month - 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def date_lower_bound(date_filter: DateFilter, now: datetime) -> Optional[datetime]:
    if date_filter is DateFilter.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_filter is DateFilter.WEEK:
        return now - timedelta(days=7)
    if date_filter is DateFilter.MONTH:
        return one_month_before(now)
    return None


def build_query(caller_id: int, params: ListParams, now: Optional[datetime] = None) -> QuerySpec:
    """Build the list query for ``caller_id``.

    Args:
        caller_id: id of the authenticated user
        params: parsed list parameters
        now: reference time for date filters, local server time by default

    Returns:
        QuerySpec combining visibility, text search, date bound and sort
    """
    if params.filter is VisibilityFilter.PRIVATE:
        visibility = Visibility(owner_id=caller_id, include_public=False, private_only=True)
    else:
        visibility = Visibility(owner_id=caller_id, include_public=True)

    text = None
    if params.search:
        text = TextMatch(
            text=params.search,
            fields=TEXT_FIELDS[params.search_by],
            tag_terms=tuple(split_search_terms(params.search)),
        )

    created_after = None
    if params.date_filter is not DateFilter.ALL:
        created_after = date_lower_bound(params.date_filter, now or datetime.now())

    return QuerySpec(
        visibility=visibility,
        text=text,
        created_after=created_after,
        sort=SORT_KEYS[params.sort],
    )
