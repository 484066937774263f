"""Simulation core: spawning, movement, collisions and the run lifecycle.

Pure Python, no engine import. Coordinates are canvas pixels with the origin
at the top-left and y growing downwards. The frame driver owns one GameState
and calls update(state, keys, dt) once per frame.
"""
import math
import random

from settings import *


# ---------- Phases ----------
MENU      = 'menu'
RUNNING   = 'running'
GAME_OVER = 'game_over'

ONCOMING  = 1
SAME_WAY  = -1


def clamp(value, lo, hi):
    return min(max(value, lo), hi)

def clamp_delta(dt):
    return clamp(dt, 0.0, MAX_FRAME_DELTA)


class Rect:
    __slots__ = ('x', 'y', 'width', 'height')

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __repr__(self):
        return f'Rect({self.x:.1f}, {self.y:.1f}, {self.width}, {self.height})'


def collide(a, b):
    """Strict AABB overlap; rectangles sharing only an edge do not collide."""
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


# ---------- Entities ----------
class Road:
    def __init__(self, canvas_width=CANVAS_WIDTH, canvas_height=CANVAS_HEIGHT):
        self.x = canvas_width * ROAD_X_FRAC
        self.y = 0
        self.width = canvas_width * ROAD_WIDTH_FRAC
        self.height = canvas_height

    @property
    def lane_width(self):
        return self.width / NUM_LANES

    def lane_center(self, lane):
        return self.x + self.lane_width * lane + self.lane_width / 2

    def max_car_x(self, car):
        return self.x + self.width - car.width


class Car:
    def __init__(self, canvas_width=CANVAS_WIDTH, canvas_height=CANVAS_HEIGHT):
        self.width = CAR_WIDTH
        self.height = CAR_HEIGHT
        self.start_x = canvas_width / 2 - self.width / 2
        self.x = self.start_x
        self.y = canvas_height - CAR_Y_FROM_BOTTOM
        self.speed_x = 0.0

    def recenter(self):
        self.x = self.start_x
        self.speed_x = 0.0

    def steer(self, direction, dt):
        # 0.88 per 60 Hz frame, whatever the real frame rate
        self.speed_x += direction * STEER_ACCEL * dt
        self.speed_x *= STEER_DAMPING ** (dt * DAMPING_FPS)
        self.x += self.speed_x * dt

    def rect(self):
        return Rect(self.x, self.y, self.width, self.height)


class Tire:
    def __init__(self, x, y=TIRE_SPAWN_Y):
        self.x = x
        self.y = y
        self.width = TIRE_SIZE
        self.height = TIRE_SIZE

    def step(self, dt, scroll):
        self.y += scroll

    def off_screen(self, state):
        return self.y >= state.canvas_height + TIRE_EXIT_MARGIN

    def rect(self):
        return Rect(self.x, self.y, self.width, self.height)


class Pedestrian:
    def __init__(self, x, y, speed):
        self.x = x
        self.y = y
        self.width = PEDESTRIAN_WIDTH
        self.height = PEDESTRIAN_HEIGHT
        self.progress = 0.0
        self.speed = speed

    def step(self, dt, scroll):
        self.progress += dt * self.speed

    def off_screen(self, state):
        return self.progress >= state.road.width + PEDESTRIAN_EXIT_MARGIN

    def rect(self):
        return Rect(self.x + self.progress, self.y, self.width, self.height)


class TrafficCar:
    def __init__(self, x, speed, direction, y=TRAFFIC_SPAWN_Y):
        self.x = x
        self.y = y
        self.width = TRAFFIC_WIDTH
        self.height = TRAFFIC_HEIGHT
        self.speed = speed
        self.direction = direction

    def step(self, dt, scroll):
        factor = 1.0 if self.direction == ONCOMING else TRAFFIC_SAME_WAY_FACTOR
        self.y += scroll + self.speed * dt * factor

    def off_screen(self, state):
        return self.y >= state.canvas_height + TRAFFIC_EXIT_MARGIN

    def rect(self):
        return Rect(self.x, self.y, self.width, self.height)


# ---------- Game state ----------
class GameState:
    """Everything one run needs. Owned by the frame driver."""

    def __init__(self, canvas_width=CANVAS_WIDTH, canvas_height=CANVAS_HEIGHT, seed=None):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.road = Road(canvas_width, canvas_height)
        self.car = Car(canvas_width, canvas_height)
        if self.road.width < self.car.width:
            raise ValueError(f'road ({self.road.width}px) is narrower than the car ({self.car.width}px)')
        self.rng = random.Random(seed)
        self.phase = MENU
        self.final_time = 0.0
        self._clear()

    def _clear(self):
        self.time = 0.0
        self.speed = BASE_SPEED
        self.difficulty = 1.0
        self.obstacles = []
        self.people = []
        self.traffic = []
        self.spawn_timer = 0.0
        self.spawn_interval = SPAWN_INTERVAL_START
        self.speed_ratio = BASE_SPEED / max(AUDIO_RATIO_FLOOR, BASE_SPEED)

    @property
    def running(self):
        return self.phase == RUNNING

    def entities(self):
        return self.obstacles + self.traffic + self.people


# ---------- Lifecycle ----------
def reset_game(state):
    state._clear()
    state.car.recenter()
    state.final_time = 0.0
    state.phase = RUNNING

def start_game(state):
    if state.phase != MENU:
        return False
    reset_game(state)
    return True

def restart_game(state):
    if state.phase != GAME_OVER:
        return False
    reset_game(state)
    return True

def trigger_game_over(state):
    if state.phase != RUNNING:
        return False
    state.phase = GAME_OVER
    state.final_time = state.time
    return True


# ---------- Time curves ----------
def difficulty_for(t):
    return 1 + t / DIFFICULTY_RAMP

def spawn_interval_for(t):
    return max(SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_START - t / SPAWN_INTERVAL_RAMP)

def target_speed_for(t, accelerate=False, brake=False):
    target = BASE_SPEED + t * SPEED_RAMP
    if accelerate: target += ACCEL_BOOST
    if brake: target -= BRAKE_DROP
    return clamp(target, MIN_SPEED, MAX_SPEED)


# ---------- Input ----------
def pressed_keys(held):
    """Snapshot of an engine held-key table as a set of key names."""
    return {k for k, v in held.items() if v}

def read_controls(keys):
    """Map held key names to (steer direction, accelerate, brake)."""
    left = any(k in keys for k in KEYS_LEFT)
    right = any(k in keys for k in KEYS_RIGHT)
    accelerate = any(k in keys for k in KEYS_ACCELERATE)
    brake = any(k in keys for k in KEYS_BRAKE)
    return int(right) - int(left), accelerate, brake


# ---------- Spawner ----------
def spawn_entity(state):
    rng = state.rng
    road = state.road
    lane = rng.randrange(NUM_LANES)
    roll = rng.random()

    if roll < TIRE_CHANCE:
        ent = Tire(road.lane_center(lane) - TIRE_SIZE / 2)
        state.obstacles.append(ent)
    elif roll < TIRE_CHANCE + PEDESTRIAN_CHANCE:
        ent = Pedestrian(
            road.x - PEDESTRIAN_START_OFFSET,
            rng.uniform(PEDESTRIAN_MIN_Y, state.canvas_height - PEDESTRIAN_BOTTOM_MARGIN),
            rng.uniform(*PEDESTRIAN_SPEED) * state.difficulty,
        )
        state.people.append(ent)
    else:
        ent = TrafficCar(
            road.lane_center(lane) - TRAFFIC_WIDTH / 2,
            rng.uniform(*TRAFFIC_SPEED) * state.difficulty,
            ONCOMING if rng.random() > 0.5 else SAME_WAY,
        )
        state.traffic.append(ent)
    return ent

def tick_spawner(state, dt):
    state.spawn_timer += dt
    state.spawn_interval = spawn_interval_for(state.time)
    if state.spawn_timer >= state.spawn_interval:
        state.spawn_timer = 0.0
        return spawn_entity(state)
    return None


# ---------- Collisions ----------
def find_collision(state):
    car_rect = state.car.rect()
    for ent in state.entities():
        if collide(car_rect, ent.rect()):
            return ent
    return None


# ---------- Step ----------
def update(state, keys, dt):
    """Advance one frame. Returns True when this frame ended the run."""
    if not state.running:
        return False

    state.time += dt
    state.difficulty = difficulty_for(state.time)

    steer, accelerate, brake = read_controls(keys)
    target = target_speed_for(state.time, accelerate, brake)
    state.speed += (target - state.speed) * min(1, dt * SPEED_SMOOTHING)

    car = state.car
    car.steer(steer, dt)
    car.x = clamp(car.x, state.road.x, state.road.max_car_x(car))

    scroll = state.speed * dt
    tick_spawner(state, dt)

    for ent in state.entities():
        ent.step(dt, scroll)

    state.obstacles = [o for o in state.obstacles if not o.off_screen(state)]
    state.traffic = [t for t in state.traffic if not t.off_screen(state)]
    state.people = [p for p in state.people if not p.off_screen(state)]

    state.speed_ratio = state.speed / max(AUDIO_RATIO_FLOOR, target)

    if find_collision(state) is not None:
        return trigger_game_over(state)
    return False


def hud_values(state):
    """Time with one decimal and rounded speed, as shown on the HUD."""
    shown = state.final_time if state.phase == GAME_OVER else state.time
    return f'{shown:.1f}', f'{int(math.floor(state.speed + 0.5))}'
