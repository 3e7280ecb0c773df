"""Event fetcher for cluster controller - builds node event watch queries."""

from __future__ import annotations


class EventFetcher:
    """Builds kubectl arguments for watching events of a single node."""

    # kubectl expands the escaped \t and \n inside jsonpath string literals
    _EVENT_TEMPLATE = 'jsonpath={.type}{"\\t"}{.reason}{"\\t"}{.message}{"\\n"}'

    @staticmethod
    def node_field_selector(node: str) -> str:
        return f"involvedObject.kind=Node,involvedObject.name={node}"

    def build_node_watch_args(self, node: str) -> tuple[str, ...]:
        """Arguments for ``kubectl get events --watch`` scoped to ``node``.

        Each watched event prints one ``type<TAB>reason<TAB>message`` line.
        """
        return (
            "get",
            "events",
            "-A",
            "--watch",
            "--field-selector",
            self.node_field_selector(node),
            "-o",
            self._EVENT_TEMPLATE,
        )
