"""
Demo entry point for Flow Lines.
Opens a window with the animated background behind some foreground content.
"""

import argparse
import sys

from PyQt5.QtWidgets import QApplication, QLabel, QMainWindow, QVBoxLayout, QWidget
from PyQt5.QtCore import Qt


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Animated flow line background demo")
    parser.add_argument("--config", help="JSON file with FlowConfig overrides")
    parser.add_argument("--seed", type=float, help="Noise seed (random if omitted)")
    parser.add_argument("--fps", type=float, help="Frame rate cap")
    parser.add_argument("--width", type=int, default=960)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--log-file", help="Also write debug log to this file")
    return parser.parse_args(argv)


def build_config(args):
    from flowlines.config import load_config

    config = load_config(args.config)
    changes = {}
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.fps:
        changes["frame_interval_ms"] = int(1000 / args.fps)
    return config.replace(**changes) if changes else config


def main(argv=None):
    # Initialize logger first
    from flowlines.utils.logger import APP, logger

    args = parse_args(argv)
    if args.log_file:
        logger.log_to_file(args.log_file)
    logger.info("Flow Lines demo starting", component=APP)

    app = QApplication(sys.argv[:1])

    from flowlines.gui.flow_background import FlowBackground

    window = QMainWindow()
    window.setWindowTitle("Flow Lines")
    window.resize(args.width, args.height)

    central = QWidget()
    central.setMouseTracking(True)
    layout = QVBoxLayout(central)
    label = QLabel("Move the pointer across the window")
    label.setAlignment(Qt.AlignCenter)
    layout.addWidget(label)
    window.setCentralWidget(central)

    background = FlowBackground(central, build_config(args))

    window.show()
    background.start()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
