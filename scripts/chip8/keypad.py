from chip8.constants import NUM_KEYS


class Keypad:
    """held state of the 16 hex keys, only the host changes it"""

    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def __getitem__(self, key):
        return self.is_pressed(key)

    def __setitem__(self, key, value):
        self.set_key(key, value)

    def __repr__(self):
        held = [f"{k:X}" for k, pressed in enumerate(self.keys) if pressed]
        return f"Keypad(held={held})"

    @staticmethod
    def _check(key):
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"key index must be within 0x0-0x{NUM_KEYS - 1:X}, got {key}")

    def set_key(self, key: int, held: bool):
        self._check(key)
        self.keys[key] = bool(held)

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self.keys[key]

    def update(self, states):
        """replace every key state at once, states holds one truthy/falsy value per key"""
        states = list(states)
        if len(states) != NUM_KEYS:
            raise ValueError(f"expected {NUM_KEYS} key states, got {len(states)}")
        self.keys = [bool(s) for s in states]

    def release_all(self):
        self.keys = [False] * NUM_KEYS

    def first_pressed(self):
        """lowest held key index, None when nothing is held"""
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key
        return None
