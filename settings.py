# ---------- Canvas ----------
CANVAS_WIDTH     = 480
CANVAS_HEIGHT    = 720
MAX_FRAME_DELTA  = 0.033   # clamp after a stalled window


# ---------- Road ----------
ROAD_X_FRAC      = 0.25
ROAD_WIDTH_FRAC  = 0.5
NUM_LANES        = 3


# ---------- Player car ----------
CAR_WIDTH        = 40
CAR_HEIGHT       = 70
CAR_Y_FROM_BOTTOM = 120

STEER_ACCEL      = 520
STEER_DAMPING    = 0.88    # per reference frame
DAMPING_FPS      = 60


# ---------- Speed ----------
BASE_SPEED       = 240
SPEED_RAMP       = 6       # px/s gained per second survived
ACCEL_BOOST      = 120
BRAKE_DROP       = 120
MIN_SPEED        = 120
MAX_SPEED        = 520
SPEED_SMOOTHING  = 3
AUDIO_RATIO_FLOOR = 160


# ---------- Difficulty/spawn ----------
DIFFICULTY_RAMP        = 20    # seconds per +1 difficulty
SPAWN_INTERVAL_START   = 1.4
SPAWN_INTERVAL_MIN     = 0.55
SPAWN_INTERVAL_RAMP    = 50

TIRE_CHANCE        = 0.4
PEDESTRIAN_CHANCE  = 0.3       # remainder is traffic


# ---------- Entities ----------
TIRE_SIZE          = 36
TIRE_SPAWN_Y       = -60
TIRE_EXIT_MARGIN   = 80

PEDESTRIAN_WIDTH   = 26
PEDESTRIAN_HEIGHT  = 36
PEDESTRIAN_START_OFFSET = 60
PEDESTRIAN_MIN_Y   = 120
PEDESTRIAN_BOTTOM_MARGIN = 200
PEDESTRIAN_SPEED   = (30, 60)
PEDESTRIAN_EXIT_MARGIN = 120

TRAFFIC_WIDTH      = 40
TRAFFIC_HEIGHT     = 70
TRAFFIC_SPAWN_Y    = -80
TRAFFIC_SPEED      = (100, 200)
TRAFFIC_SAME_WAY_FACTOR = 0.7
TRAFFIC_EXIT_MARGIN = 120


# ---------- Controls ----------
KEYS_LEFT        = ('left arrow', 'a')
KEYS_RIGHT       = ('right arrow', 'd')
KEYS_ACCELERATE  = ('up arrow', 'w')
KEYS_BRAKE       = ('down arrow', 's')
KEYS_START       = ('space', 'enter')


# ---------- Colors ----------
COLOR_BACKGROUND = '#0d1117'
COLOR_VERGE      = '#0f1724'
COLOR_ROAD       = '#1e293b'
COLOR_MARKING    = '#ffd65a'
COLOR_TREE       = '#1f3b21'
COLOR_TRUNK      = '#5c3b1e'
COLOR_PLAYER     = '#38bdf8'
COLOR_TRAFFIC    = '#e11d48'
COLOR_WINDOW     = '#1f2937'
COLOR_ROOF       = '#0f172a'
COLOR_TIRE       = '#20242f'
COLOR_TIRE_RIM   = '#697a8a'
COLOR_PEDESTRIAN = '#f97316'

TREES_PER_SIDE   = 18
TREE_SPACING     = 80
TREE_SCROLL      = 200
DASH_LENGTH      = 30
DASH_WIDTH       = 4
DASH_GAP         = 24
DASH_SCROLL      = 260


# ---------- Audio ----------
SOUNDS_DIR       = 'sounds'
SAMPLE_RATE      = 22050
LOOP_SECONDS     = 1.0

GAIN_TO_VOLUME   = 4.0     # web-audio gains are tiny next to ursina volume

ENGINE_BASE_FREQ = 70
ENGINE_FREQ_SPAN = 140
ENGINE_GAIN_RUNNING = 0.035
ENGINE_GAIN_SPAN = 0.015
ENGINE_GAIN_IDLE = 0.008
ENGINE_CUTOFF_BASE = 280
ENGINE_CUTOFF_SPAN = 260
ENGINE_FILE      = 'engine_tone_{}.wav'
ENGINE_WAVEFORM  = 'triangle'
ENGINE_LOOP_FREQ = 110
ENGINE_LAYER_RATIOS = (0.0, 0.5, 1.0, 1.5)   # one filtered loop per ratio, crossfaded
ENGINE_GLIDE     = 0.08    # seconds to settle on a new pitch

MUSIC_FREQ       = 220
MUSIC_WOBBLE     = 30
MUSIC_WOBBLE_RATE = 0.5
MUSIC_GAIN       = 0.03
MUSIC_DUCK       = 0.5     # music level while not running
PAD_GAIN         = 0.02
BASS_GAIN        = 0.02
ARP_GAIN         = 0.015
PAD_LFO_RATE     = 0.25
PAD_LFO_DEPTH    = 8

SEQ_BPM          = 80
SEQ_SCALE        = (0, 3, 5, 7, 10)
SEQ_CHORD_ROOTS  = (48, 43, 50, 45)
SEQ_ARP_PATTERN  = (0, 2, 4, 2, 0, 3, 4, 3)

# (file, waveform, loop frequency)
VOICE_FILES = {
    'music':  ('music_tone.wav',  'triangle', 220),
    'pad':    ('pad_tone.wav',    'sawtooth', 110),
    'bass':   ('bass_tone.wav',   'square',   55),
    'arp':    ('arp_tone.wav',    'triangle', 220),
}
CRASH_FILE       = 'crash.wav'
CRASH_SECONDS    = 0.4
CRASH_GAIN       = 0.2
