from enum import StrEnum


class OrderDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @property
    def prefix(self) -> str:
        return "-" if self is OrderDirection.DESC else ""


class Filter(StrEnum):
    """Row filter operators.

    Each value is the token Baserow expects in ``filter__<field>__<token>``
    query parameters. Tokens are stable; callers may persist them.
    """

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"

    # Date
    DATE_IS = "date_is"
    DATE_IS_NOT = "date_is_not"
    DATE_IS_BEFORE = "date_is_before"
    DATE_IS_ON_OR_BEFORE = "date_is_on_or_before"
    DATE_IS_AFTER = "date_is_after"
    DATE_IS_ON_OR_AFTER = "date_is_on_or_after"
    DATE_IS_WITHIN = "date_is_within"
    DATE_EQUAL = "date_equal"
    DATE_NOT_EQUAL = "date_not_equal"
    DATE_EQUALS_TODAY = "date_equals_today"
    DATE_BEFORE_TODAY = "date_before_today"
    DATE_AFTER_TODAY = "date_after_today"
    DATE_WITHIN_DAYS = "date_within_days"
    DATE_WITHIN_WEEKS = "date_within_weeks"
    DATE_WITHIN_MONTHS = "date_within_months"
    DATE_EQUALS_DAYS_AGO = "date_equals_days_ago"
    DATE_EQUALS_MONTHS_AGO = "date_equals_months_ago"
    DATE_EQUALS_YEARS_AGO = "date_equals_years_ago"
    DATE_EQUALS_WEEK = "date_equals_week"
    DATE_EQUALS_MONTH = "date_equals_month"
    DATE_EQUALS_YEAR = "date_equals_year"
    DATE_EQUALS_DAY_OF_MONTH = "date_equals_day_of_month"
    DATE_BEFORE = "date_before"
    DATE_BEFORE_OR_EQUAL = "date_before_or_equal"
    DATE_AFTER = "date_after"
    DATE_AFTER_OR_EQUAL = "date_after_or_equal"
    DATE_AFTER_DAYS_AGO = "date_after_days_ago"

    # Value presence
    HAS_EMPTY_VALUE = "has_empty_value"
    HAS_NOT_EMPTY_VALUE = "has_not_empty_value"
    HAS_VALUE_EQUAL = "has_value_equal"
    HAS_NOT_VALUE_EQUAL = "has_not_value_equal"
    HAS_VALUE_CONTAINS = "has_value_contains"
    HAS_NOT_VALUE_CONTAINS = "has_not_value_contains"
    HAS_VALUE_CONTAINS_WORD = "has_value_contains_word"
    HAS_NOT_VALUE_CONTAINS_WORD = "has_not_value_contains_word"
    HAS_VALUE_LENGTH_IS_LOWER_THAN = "has_value_length_is_lower_than"
    HAS_ALL_VALUES_EQUAL = "has_all_values_equal"
    HAS_ANY_SELECT_OPTION_EQUAL = "has_any_select_option_equal"
    HAS_NONE_SELECT_OPTION_EQUAL = "has_none_select_option_equal"

    # Text
    CONTAINS = "contains"
    CONTAINS_NOT = "contains_not"
    CONTAINS_WORD = "contains_word"
    DOESNT_CONTAIN_WORD = "doesnt_contain_word"

    # File
    FILENAME_CONTAINS = "filename_contains"
    HAS_FILE_TYPE = "has_file_type"
    FILES_LOWER_THAN = "files_lower_than"
    LENGTH_IS_LOWER_THAN = "length_is_lower_than"

    # Number
    HIGHER_THAN = "higher_than"
    HIGHER_THAN_OR_EQUAL = "higher_than_or_equal"
    LOWER_THAN = "lower_than"
    LOWER_THAN_OR_EQUAL = "lower_than_or_equal"
    IS_EVEN_AND_WHOLE = "is_even_and_whole"

    # Select / boolean
    SINGLE_SELECT_EQUAL = "single_select_equal"
    SINGLE_SELECT_NOT_EQUAL = "single_select_not_equal"
    SINGLE_SELECT_IS_ANY_OF = "single_select_is_any_of"
    SINGLE_SELECT_IS_NONE_OF = "single_select_is_none_of"
    BOOLEAN = "boolean"

    # Link row
    LINK_ROW_HAS = "link_row_has"
    LINK_ROW_HAS_NOT = "link_row_has_not"
    LINK_ROW_CONTAINS = "link_row_contains"
    LINK_ROW_NOT_CONTAINS = "link_row_not_contains"

    # Multiple select / collaborators
    MULTIPLE_SELECT_HAS = "multiple_select_has"
    MULTIPLE_SELECT_HAS_NOT = "multiple_select_has_not"
    MULTIPLE_COLLABORATORS_HAS = "multiple_collaborators_has"
    MULTIPLE_COLLABORATORS_HAS_NOT = "multiple_collaborators_has_not"

    # Emptiness
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"

    # User
    USER_IS = "user_is"
    USER_IS_NOT = "user_is_not"

    def as_str(self) -> str:
        return self.value
