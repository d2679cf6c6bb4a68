"""
titles.py — Four ways to report "I have no title for you".

TitleDataManager returns "New Title" while `is_active` is true and fails
otherwise.  Each getter reports that failure differently, from least to most
informative:

  1. get_title_optional()  — None.  The caller cannot learn why.
  2. get_title_pair()      — (title, error).  Both slots exist at once, so
                             (title, error) and (None, None) are representable
                             even though this manager never returns them.
  3. get_title_result()    — Success or Failure, exactly one of the two.
  4. get_title()           — the title, or a raised BadURLError.
"""

from trio_loader.errors import BadURLError
from trio_loader.results import capture

NEW_TITLE = "New Title"


class TitleDataManager:

    def __init__(self, is_active=False):
        self.is_active = is_active

    def get_title_optional(self):
        if self.is_active:
            return NEW_TITLE
        return None

    def get_title_pair(self):
        if self.is_active:
            return NEW_TITLE, None
        return None, BadURLError()

    def get_title_result(self):
        return capture(self.get_title, catch=(BadURLError,))

    def get_title(self):
        if self.is_active:
            return NEW_TITLE
        raise BadURLError()
