from ursina import *
import time, os

import sim
from settings import *
from synth import Sequencer, oscillator_params, gain_to_volume, engine_layer_weights, render_voice_files
from view import to_world, tree_rows, dash_rows, divider_xs, sync_pool, DASH_COUNT


# ---------- App / Window ----------
app = Ursina(borderless=False)
window.title = 'Lane Runner'
window.color = color.hex(COLOR_BACKGROUND)
window.size = (CANVAS_WIDTH, CANVAS_HEIGHT)

# one world unit per canvas pixel
camera.orthographic = True
camera.fov = CANVAS_HEIGHT
camera.position = (0, 0, -20)


def make_rect(x, y, w, h, col, z=0, parent=scene):
    return Entity(parent=parent, model='quad', color=color.hex(col), origin=(-.5, .5),
                  scale=(w, h), position=to_world(x, y, z) if parent is scene else (x, -y, z))


# ---------- Simulation ----------
game = sim.GameState()
road = game.road


# ---------- Backdrop ----------
make_rect(0, 0, road.x, CANVAS_HEIGHT, COLOR_VERGE, z=3)
make_rect(road.x + road.width, 0, CANVAS_WIDTH - road.x - road.width, CANVAS_HEIGHT, COLOR_VERGE, z=3)
make_rect(road.x, 0, road.width, CANVAS_HEIGHT, COLOR_ROAD, z=2)

def make_tree():
    tree = Entity()
    Entity(parent=tree, model='quad', color=color.hex(COLOR_TRUNK), origin=(-.5, .5),
           scale=(8, 22), position=(-4, -10, .1))
    Entity(parent=tree, model='circle', color=color.hex(COLOR_TREE), scale=36)
    return tree

left_trees = [make_tree() for _ in range(TREES_PER_SIDE)]
right_trees = [make_tree() for _ in range(TREES_PER_SIDE)]

def place_trees(t):
    for tree_l, tree_r, y in zip(left_trees, right_trees, tree_rows(t)):
        tree_l.position = to_world(road.x - 50, y, 1)
        tree_r.position = to_world(road.x + road.width + 50, y + 40, 1)

lane_dashes = [
    [make_rect(0, 0, DASH_WIDTH, DASH_LENGTH, COLOR_MARKING, z=1.5) for _ in range(DASH_COUNT)]
    for _ in range(NUM_LANES - 1)
]

def place_dashes(t):
    rows = dash_rows(t)
    for x, dashes in zip(divider_xs(road), lane_dashes):
        for dash, y in zip(dashes, rows):
            dash.position = to_world(x - DASH_WIDTH / 2, y, 1.5)


# ---------- Sprites ----------
def make_car_sprite(body_color, w=CAR_WIDTH, h=CAR_HEIGHT):
    car = Entity()
    make_rect(0, 0, w, h, body_color, parent=car)
    make_rect(6, 10, w - 12, 16, COLOR_WINDOW, z=-.1, parent=car)
    make_rect(6, h - 26, w - 12, 16, COLOR_WINDOW, z=-.1, parent=car)
    make_rect(6, 30, w - 12, 12, COLOR_ROOF, z=-.1, parent=car)
    return car

def make_tire_sprite():
    tire = Entity()
    r = TIRE_SIZE / 2
    Entity(parent=tire, model='circle', color=color.hex(COLOR_TIRE_RIM), scale=TIRE_SIZE + 4, position=(r, -r, 0))
    Entity(parent=tire, model='circle', color=color.hex(COLOR_TIRE), scale=TIRE_SIZE - 4, position=(r, -r, -.1))
    return tire

def make_pedestrian_sprite():
    person = Entity()
    make_rect(0, 0, PEDESTRIAN_WIDTH, PEDESTRIAN_HEIGHT, COLOR_PEDESTRIAN, parent=person)
    make_rect(4, 6, PEDESTRIAN_WIDTH - 8, 8, COLOR_ROOF, z=-.1, parent=person)
    return person

player = make_car_sprite(COLOR_PLAYER)
tire_pool = []
traffic_pool = []
people_pool = []

def render():
    place_trees(game.time)
    place_dashes(game.time)
    sync_pool(tire_pool, game.obstacles, make_tire_sprite)
    sync_pool(traffic_pool, game.traffic, lambda: make_car_sprite(COLOR_TRAFFIC, TRAFFIC_WIDTH, TRAFFIC_HEIGHT))
    sync_pool(people_pool, game.people, make_pedestrian_sprite)
    player.position = to_world(game.car.x, game.car.y, -.5)


# ---------- HUD (text) ----------
time_text = Text(text='', parent=camera.ui, origin=(-.5,.5), position=(-.32,.48), scale=1, color=color.white)
speed_text = Text(text='', parent=camera.ui, origin=(-.5,.5), position=(-.32,.44), scale=1, color=color.azure)

title_text = Text('LANE RUNNER', parent=camera.ui, origin=(0,0), y=.2, scale=2, color=color.hex(COLOR_PLAYER))
info_text = Text('A/D or Arrows: steer | W/Up: accelerate | S/Down: brake\nSpace: Start | Esc: Quit',
                 parent=camera.ui, origin=(0,0), y=.08, scale=.8, color=color.rgba(255,255,255,180))
play_button = Button(text='Play', parent=camera.ui, scale=(.22,.07), y=-.06, color=color.hex(COLOR_ROAD))

over_text = Text('CRASH!', parent=camera.ui, origin=(0,0), y=.16, scale=2, color=color.hex(COLOR_TRAFFIC))
final_text = Text('', parent=camera.ui, origin=(0,0), y=.06, color=color.white)
restart_button = Button(text='Restart', parent=camera.ui, scale=(.22,.07), y=-.06, color=color.hex(COLOR_ROAD))

def show_menu(visible):
    for e in (title_text, info_text, play_button):
        e.enabled = visible

def show_game_over(visible):
    for e in (over_text, final_text, restart_button):
        e.enabled = visible
    if visible:
        final_text.text = f'You lasted {sim.hud_values(game)[0]}s'

def update_hud():
    t, s = sim.hud_values(game)
    time_text.text = f'Time: {t}'
    speed_text.text = f'Speed: {s}'


# ---------- Audio helpers ----------
def make_audio(path, loop=False, autoplay=False, volume=1.0):
    if not os.path.exists(path):
        print(f'[audio] missing file: {path}')
        return None
    try:
        return Audio(path, loop=loop, autoplay=autoplay, volume=volume)
    except Exception as e:
        print(f'[audio] failed to load {path}:', e)
        return None

try:
    voice_paths = render_voice_files(SOUNDS_DIR)
except OSError as e:
    print('[audio] could not render voices:', e)
    voice_paths = {}

voices = {}
engine_layers = []
engine_pitch = ENGINE_BASE_FREQ / ENGINE_LOOP_FREQ
crash_audio = None
sequencer = Sequencer()
audio_started = False

def ensure_audio():
    global crash_audio, audio_started
    if audio_started:
        return
    audio_started = True
    # missing layers stay None so weights keep lining up with ENGINE_LAYER_RATIOS
    for path in voice_paths.get('engine', []):
        a = make_audio(path, loop=True, autoplay=False, volume=0.0)
        if a:
            a.play()
        engine_layers.append(a)
    for name in VOICE_FILES:
        if name not in voice_paths:
            continue
        a = make_audio(voice_paths[name], loop=True, autoplay=False, volume=0.0)
        if a:
            a.play()
            voices[name] = a
    if 'crash' in voice_paths:
        crash_audio = make_audio(voice_paths['crash'], loop=False, autoplay=False,
                                 volume=gain_to_volume(CRASH_GAIN))
    sequencer.reset()

def play_crash_sound():
    if not crash_audio: return
    try:
        crash_audio.stop(); crash_audio.play()
    except Exception as e:
        print('[audio] crash playback failed:', e)

def update_audio(dt):
    global engine_pitch
    if not audio_started:
        return
    sequencer.step(dt)
    params = oscillator_params(game.speed_ratio, game.running, game.time, sequencer)
    fade = min(1, 6*dt)

    # engine: glide the shared pitch, crossfade the filtered layers by ratio
    engine = params['engine']
    engine_pitch = lerp(engine_pitch, engine['freq'] / ENGINE_LOOP_FREQ, min(1, dt / ENGINE_GLIDE))
    engine_vol = gain_to_volume(engine['gain'])
    for a, weight in zip(engine_layers, engine_layer_weights(game.speed_ratio)):
        if a is None: continue
        a.pitch = engine_pitch
        a.volume = lerp(a.volume, engine_vol * weight, fade)

    for name, a in voices.items():
        p = params[name]
        a.pitch = p['freq'] / VOICE_FILES[name][2]
        target_vol = gain_to_volume(p['gain'])
        if not game.running:
            target_vol *= MUSIC_DUCK
        a.volume = lerp(a.volume, target_vol, fade)


# ---------- Lifecycle ----------
def start_run():
    if sim.start_game(game):
        show_menu(False)
        show_game_over(False)
        ensure_audio()

def restart_run():
    if sim.restart_game(game):
        show_game_over(False)

play_button.on_click = start_run
restart_button.on_click = restart_run


def input(key):
    if key == 'escape':
        application.quit()

    if key in KEYS_START:
        if game.phase == sim.MENU:
            start_run()
        elif game.phase == sim.GAME_OVER:
            restart_run()


# ---------- Update ----------
def update():
    dt = sim.clamp_delta(time.dt)
    keys = sim.pressed_keys(held_keys)

    if sim.update(game, keys, dt):
        play_crash_sound()
        show_game_over(True)

    update_audio(dt)
    update_hud()
    render()


# ---------- Boot overlays ----------
show_game_over(False)
show_menu(True)
render()
update_hud()

app.run()
