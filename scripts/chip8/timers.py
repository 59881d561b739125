class Timers:
    def __init__(self):
        self.dt = 0     # delay timer, active when non-zero
        self.st = 0     # sound timer, active when non-zero

    def __repr__(self):
        return f"DELAY_TIMER:{self.dt} | SOUND_TIMER:{self.st}"

    @property
    def sound_active(self) -> bool:
        return self.st > 0

    def tick(self):
        """decrease both timers by one, never below zero; the driver calls this at 60Hz"""
        if self.dt > 0:
            self.dt -= 1
        if self.st > 0:
            self.st -= 1
