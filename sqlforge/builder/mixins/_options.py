from typing_extensions import Self

__all__ = ("OptionsMixin",)


class OptionsMixin:
    """Mixin providing execution options written right after the statement verb."""

    _options: "list[str]"

    def option(self, option: str) -> Self:
        """Add an execution option such as ``DISTINCT`` or ``IGNORE``.

        Args:
            option: The option keyword, rendered verbatim.

        Returns:
            The current builder instance for method chaining.
        """
        self._options.append(option)
        return self

    def distinct(self) -> Self:
        return self.option("DISTINCT")

    def calc_found_rows(self) -> Self:
        return self.option("SQL_CALC_FOUND_ROWS")

    def ignore(self) -> Self:
        return self.option("IGNORE")

    def get_options(self) -> "list[str]":
        return list(self._options)
