from __future__ import annotations


class LayerLoadError(Exception):
    """
    A layer's data could not be obtained or parsed.

    Terminal for that layer until the whole map is reloaded.
    """

    def __init__(self, layer_id: str, reason: str) -> None:
        super().__init__(f"Layer '{layer_id}' failed to load: {reason}")
        self.layer_id = layer_id
        self.reason = reason
