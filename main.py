"""
Aether Particles - Gesture-Steered Particle Visualization

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Aether Particles - Gesture-Steered Particle Visualization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--template",
        choices=["heart", "flower", "saturn", "buddha", "fireworks"],
        default=None,
        help="Initial shape template (overrides config)",
    )

    parser.add_argument(
        "--color",
        default=None,
        help="Particle colour as hex, e.g. '#ff007b' (overrides config)",
    )

    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of particles (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera feed with landmarks and control signal instead of particles",
    )

    return parser.parse_args()


def run_debug(config):
    """
    Run the sensing pipeline against the camera and show landmarks plus the
    resulting control signal. Useful for tuning the filter and classifier bands.
    """
    import cv2
    from tracking import DetectorFailure, GesturePipeline, Gesture
    from tracking.hand_tracker import Camera, MediaPipeHandDetector, draw_landmarks

    camera = Camera(config.camera)
    detector = MediaPipeHandDetector(config.mediapipe)
    pipeline = GesturePipeline(detector, config)

    print("Starting debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not camera.open():
        print("ERROR: Could not open camera")
        return 1

    try:
        pipeline.start()
    except Exception as e:
        print(f"ERROR: {e}")
        camera.release()
        return 1

    last_gesture = Gesture.NONE
    try:
        while True:
            frame = camera.read()
            if frame is None:
                pipeline.record_failure(DetectorFailure("Camera returned no frame"))
                if pipeline.disabled:
                    print("ERROR: Camera stopped delivering frames")
                    break
                # Keep the window responsive to 'q'
                if cv2.waitKey(30) & 0xFF == ord('q'):
                    break
                continue

            signal = pipeline.detect_once(frame)
            frame = draw_landmarks(frame, pipeline.last_landmarks)

            info_lines = [
                f"Active: {signal.active}",
                f"Tension: {signal.tension:.2f}",
                f"Expansion: {signal.expansion:.2f}",
                f"Gesture: {signal.gesture.name}",
            ]
            for i, line in enumerate(info_lines):
                cv2.putText(
                    frame, line, (10, 30 + i * 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                )

            if signal.gesture != last_gesture:
                print(f"[gesture] {last_gesture.name} -> {signal.gesture.name}")
                last_gesture = signal.gesture

            cv2.imshow("Aether Particles Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        pipeline.stop()
        camera.release()
        cv2.destroyAllWindows()

    return 0


def run_particles(config):
    """Run the particle window with gesture control."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from tracking.worker import DetectionWorker
    from ui import ParticleWindow

    app = QApplication(sys.argv)

    worker = DetectionWorker(config)
    window = ParticleWindow(config, signal_source=worker.snapshot)
    window.show()

    def cleanup():
        """Ensure camera and detector are released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop()
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    worker.error.connect(lambda msg: print(f"DETECTION ERROR: {msg}"))
    worker.detection_disabled.connect(window.set_detection_idle)

    if not worker.start():
        # Keep running: the particles drift in the idle cloud
        window.set_detection_idle()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    # Load config
    from tracking import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.template:
        config.particles.template = args.template.upper()
    if args.color:
        config.particles.color = args.color
    if args.count:
        config.particles.count = args.count

    print("Aether Particles starting...")
    print(f"  Template: {config.particles.template}")
    print(f"  Particles: {config.particles.count}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_debug(config)
    return run_particles(config)


if __name__ == "__main__":
    sys.exit(main())
