"""
Autocomplete search used by the client and appointment pickers.

The widget keeps the typed query, whether the suggestion list is open and
which suggestion is highlighted. Records can be model instances or the
dicts returned by the API.
"""

MIN_QUERY_LENGTH = 2
PROMPT_MESSAGE = 'Digite para buscar'
NO_CLIENT_MESSAGE = 'Nenhum cliente encontrado'


def get_field(record, name, default=None):
    """Read a field from a dict or an object"""
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def client_search_text(record):
    return f"{get_field(record, 'name') or ''} {get_field(record, 'phone') or ''}"


def client_display(record):
    """'Name (phone)', or just the name when there is no phone"""
    name = get_field(record, 'name') or ''
    phone = get_field(record, 'phone')
    return f"{name} ({phone})" if phone else name


def matches_query(text, query, min_length=MIN_QUERY_LENGTH):
    """Case-insensitive contains match; queries below min_length never match"""
    if not query or len(query) < min_length:
        return False
    return query.lower() in (text or '').lower()


class AutocompleteSearch:
    """Keyboard-driven autocomplete over an in-memory list of records."""

    def __init__(self, records, on_change=None, search_text=client_search_text,
                 display=client_display, key='id', min_length=MIN_QUERY_LENGTH,
                 empty_message=NO_CLIENT_MESSAGE):
        self.records = list(records)
        self.on_change = on_change
        self.search_text = search_text
        self.display = display
        self.key = key
        self.min_length = min_length
        self.empty_message = empty_message
        self.query = ''
        self.is_open = False
        self.highlighted_index = -1
        self.selected_id = None
        self._last_shape = (False, 0)

    @property
    def matches(self):
        if len(self.query) < self.min_length:
            return []
        return [r for r in self.records if matches_query(self.search_text(r), self.query, self.min_length)]

    @property
    def status_message(self):
        """Text shown in the open list when there is nothing to pick"""
        if self.matches:
            return None
        if len(self.query) < self.min_length:
            return PROMPT_MESSAGE
        return self.empty_message

    @property
    def highlighted(self):
        matches = self.matches
        if 0 <= self.highlighted_index < len(matches):
            return matches[self.highlighted_index]
        return None

    def _sync_highlight(self):
        # Highlight resets only when the list opens/closes or its size changes
        shape = (self.is_open, len(self.matches))
        if shape != self._last_shape:
            self.highlighted_index = 0 if (self.is_open and shape[1] > 0) else -1
            self._last_shape = shape

    def set_records(self, records):
        self.records = list(records)
        self.set_value(self.selected_id)

    def set_value(self, record_id):
        """Show the display text of the record with this id, or clear the query"""
        self.selected_id = record_id
        selected = None
        if record_id is not None:
            selected = next(
                (r for r in self.records if str(get_field(r, self.key)) == str(record_id)),
                None
            )
        self.query = self.display(selected) if selected is not None else ''
        self._sync_highlight()

    def type(self, text):
        self.query = text or ''
        self.is_open = True
        self._sync_highlight()

    def focus(self):
        self.is_open = True
        self._sync_highlight()

    def close(self):
        self.is_open = False
        self._sync_highlight()

    def move_down(self):
        if not self.is_open:
            # Opening the list highlights its first entry
            self.focus()
            return
        count = len(self.matches)
        if count == 0:
            self.highlighted_index = -1
        elif self.highlighted_index < 0:
            self.highlighted_index = 0
        else:
            self.highlighted_index = min(count - 1, self.highlighted_index + 1)

    def move_up(self):
        if not self.is_open:
            self.focus()
            return
        count = len(self.matches)
        if count == 0:
            self.highlighted_index = -1
        elif self.highlighted_index <= 0:
            self.highlighted_index = 0
        else:
            self.highlighted_index = max(0, self.highlighted_index - 1)

    def hover(self, index):
        if 0 <= index < len(self.matches):
            self.highlighted_index = index

    def enter(self):
        """Pick the highlighted suggestion; returns it, or None when nothing is highlighted"""
        if not self.is_open:
            return None
        record = self.highlighted
        if record is None:
            return None
        return self._choose(record)

    def escape(self):
        self.close()

    def pick(self, index):
        """Pick a suggestion by position, as a mouse click does"""
        matches = self.matches
        if not 0 <= index < len(matches):
            return None
        return self._choose(matches[index])

    def _choose(self, record):
        record_id = get_field(record, self.key)
        label = self.display(record)
        self.selected_id = record_id
        self.query = label
        self.close()
        if self.on_change:
            self.on_change(str(record_id), label)
        return record
