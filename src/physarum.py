"""Physarum simulation: realtime window or headless PNG render.

150,000 agents start on a tiny circle in the middle of an 800x800 trail
field, all facing inward, and grow a branching network from there.

Realtime (pygame window, Escape or close to quit):

    python src/physarum.py
    python src/physarum.py --agents 50000 --seed 3 --gif

Headless (no window, writes a PNG):

    python src/physarum.py --steps 500 --output physarum.png
"""

import argparse
import math
import sys
import time
from collections import deque

import imageio
import pygame
from PIL import Image

from physarum_config import DEFAULT_CONFIG, make_config
from physarum_field import composite_over_black
from physarum_sim import POLICIES, Simulation

# --- Display ---
PIXEL_SCALE = 1  # initial window size = grid size * PIXEL_SCALE
FPS = 0  # 0 = uncapped
GIF_FRAMES = 100
GIF_OUTPUT = "output.gif"


def print_config(cfg, policy):
    print(
        f"\n{cfg['num_agents']} agents on {cfg['width']}x{cfg['height']} "
        f"({policy} update)"
    )
    print(
        f"  MoveSpeed={cfg['move_speed']:.2f}  "
        f"SensorDist={cfg['sensor_distance']:.1f}  "
        f"SensorAngle={math.degrees(cfg['sensor_angle']):.0f}°  "
        f"TurnSpeed={cfg['turn_speed']:.2f}  "
        f"Deposit={cfg['deposit']:.2f}  "
        f"Decay={cfg['decay']:.2f}"
    )
    print()


# --- Rendering ---


def frame_surface(rgba, size):
    """Build a pygame surface of the trail image scaled to ``size`` (w, h)."""
    rgb = composite_over_black(rgba)
    # surfarray expects (width, height, 3) so transpose the spatial axes
    surface = pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))
    if surface.get_size() != tuple(size):
        surface = pygame.transform.scale(surface, size)
    return surface


def draw(screen, rgba):
    """Draw the trail image stretched over the whole window."""
    screen.blit(frame_surface(rgba, screen.get_size()), (0, 0))


def save_image(rgba, path):
    Image.fromarray(composite_over_black(rgba)).save(path)


# --- Modes ---


def run_headless(sim, steps, output):
    """Step ``sim`` without a window and save the last frame as a PNG."""
    t_start = time.time()

    def progress(step):
        if (step + 1) % 10 == 0 or step in (0, steps - 1):
            elapsed = time.time() - t_start
            rate = (step + 1) / max(elapsed, 1e-9)
            eta = (steps - step - 1) / rate
            print(
                f"  step {step + 1}/{steps}  "
                f"({elapsed:.1f}s elapsed, ~{eta:.0f}s remaining, {rate:.1f} steps/s)"
            )

    sim.run(steps - 1, progress=progress)
    rgba = sim.step(render=True)
    progress(steps - 1)

    print()
    print(f"Simulation complete: {time.time() - t_start:.1f}s")
    save_image(rgba, output)
    print(f"Saved: {output} ({sim.config['width']}x{sim.config['height']})")


def run_realtime(sim, fps, save_gif, scale=PIXEL_SCALE):
    cfg = sim.config
    pygame.init()
    screen = pygame.display.set_mode(
        (cfg["width"] * scale, cfg["height"] * scale), pygame.RESIZABLE
    )
    pygame.display.set_caption("Physarum Simulation")
    clock = pygame.time.Clock()
    frames = deque(maxlen=GIF_FRAMES)

    frame_count = 0
    last_report = time.time()
    current_fps = 0.0

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.get_surface()

        start = time.time()
        rgba = sim.step(render=True)
        elapsed = (time.time() - start) * 1000

        draw(screen, rgba)
        pygame.display.flip()

        if save_gif:
            frames.append(composite_over_black(rgba))

        frame_count += 1
        now = time.time()
        if now - last_report >= 1.0:
            current_fps = frame_count / (now - last_report)
            print(f"FPS: {current_fps:.2f}")
            frame_count = 0
            last_report = now

        pygame.display.set_caption(
            f"Physarum Simulation  |  tick={sim.tick}  "
            f"agents={len(sim.swarm)}  {elapsed:.0f}ms  {current_fps:.1f} fps"
        )

        clock.tick(fps)

    pygame.quit()

    if save_gif and frames:
        imageio.mimsave(GIF_OUTPUT, list(frames), fps=30)
        print(f"Saved: {GIF_OUTPUT} ({len(frames)} frames)")


# --- Main ---


def build_parser():
    parser = argparse.ArgumentParser(description="Physarum simulation")
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Run this many steps headless and save a PNG instead of opening a window",
    )
    parser.add_argument(
        "--agents",
        type=int,
        default=DEFAULT_CONFIG["num_agents"],
        help=f"Number of agents (default: {DEFAULT_CONFIG['num_agents']})",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_CONFIG["width"],
        help=f"Grid width (default: {DEFAULT_CONFIG['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_CONFIG["height"],
        help=f"Grid height (default: {DEFAULT_CONFIG['height']})",
    )
    parser.add_argument(
        "--policy",
        choices=POLICIES,
        default="snapshot",
        help="snapshot: agents sense last frame's trail; "
        "sequential: agents see earlier deposits of the same frame (slow)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=PIXEL_SCALE,
        help=f"Initial window size as a multiple of the grid (default: {PIXEL_SCALE}); "
        "the window can be resized afterwards",
    )
    parser.add_argument(
        "--fps", type=int, default=FPS, help="Frame rate cap, 0 for none (default: 0)"
    )
    parser.add_argument(
        "--gif",
        action="store_true",
        help=f"Save the last {GIF_FRAMES} frames to {GIF_OUTPUT} on exit",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="physarum.png",
        help="Output filename for headless runs (default: physarum.png)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        cfg = make_config(
            width=args.width, height=args.height, num_agents=args.agents
        )
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        sys.exit(1)

    if args.scale < 1:
        print(f"--scale must be at least 1, got {args.scale}")
        sys.exit(1)

    if args.steps is not None and args.steps < 1:
        print(f"--steps must be at least 1, got {args.steps}")
        sys.exit(1)

    sim = Simulation(cfg, seed=args.seed, policy=args.policy)
    print_config(cfg, args.policy)

    if args.steps is not None:
        run_headless(sim, args.steps, args.output)
    else:
        run_realtime(sim, args.fps, args.gif, args.scale)


if __name__ == "__main__":
    main()
