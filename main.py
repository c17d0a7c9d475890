#!/usr/bin/env python3
"""
Course Planner

Match a scraped course curriculum against raw lesson videos and write the
Master Plan used by the editing automation.

Usage:
    python main.py curriculum.json -b ~/Courses                 # Plan using the course title
    python main.py curriculum.json -b ~/Courses -n "Wireshark"  # Explicit course name
    python main.py curriculum.json -b ~/Courses --videos D:/raw --slides D:/slides
    python main.py curriculum.json -b ~/Courses --print-plan    # Also print the plan JSON
"""

import argparse
import sys

from course_planner.config import reload_config
from course_planner.core.service import PlanService
from course_planner.exceptions import CoursePlannerError, MissingSlidesError
from course_planner.loader import load_curriculum
from course_planner.logging_config import get_logger, log_exception, setup_logging_from_config

# Initialize logging (will be configured in main())
logger = get_logger('main')


def print_progress(current: int, total: int, file_name: str, status: str):
    """Print probe progress to console."""
    print(f"[{current}/{total}] {file_name}: {status}")


def main():
    parser = argparse.ArgumentParser(
        description="Build a Master Plan from a scraped curriculum and raw videos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py output/course.json -b "H:/Temp/projects"
    python main.py output/course.json -b "H:/Temp/projects" -n "Wireshark"
    python main.py output/course.json -b "H:/Temp/projects" --slides "H:/slides" -V
        """
    )

    parser.add_argument(
        'curriculum',
        help='Curriculum JSON produced by the course scraper'
    )
    parser.add_argument(
        '--base-dir', '-b',
        required=True,
        help='Parent directory that holds one folder per course'
    )
    parser.add_argument(
        '--course-name', '-n',
        help='Course name (default: the curriculum title)'
    )
    parser.add_argument(
        '--videos',
        help='Raw video directory (default: <course>/_01_RAW_VIDEOS)'
    )
    parser.add_argument(
        '--slides',
        help='Slide directory (default: <course>/_02_SLIDES)'
    )
    parser.add_argument(
        '--config', '-c',
        help='Path to config.yaml'
    )
    parser.add_argument(
        '--print-plan',
        action='store_true',
        help='Print the Master Plan JSON to stdout'
    )
    parser.add_argument(
        '--verbose', '-V',
        action='store_true',
        help='Enable verbose output (DEBUG level logging)'
    )
    parser.add_argument(
        '--log-file',
        help='Write logs to file (default: from config, else none)'
    )

    args = parser.parse_args()

    try:
        config = reload_config(args.config)
    except CoursePlannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging_from_config(config.logging, verbose=args.verbose, log_file=args.log_file)
    logger.info("Course Planner starting")

    try:
        curriculum = load_curriculum(args.curriculum)
        course_name = (args.course_name or curriculum.course_title).strip()
        if not course_name:
            print("Error: No course name given and the curriculum has no title. Use --course-name.")
            sys.exit(1)

        service = PlanService(config=config)
        try:
            layout = service.layout_for(
                args.base_dir,
                course_name,
                video_dir=args.videos,
                slide_dir=args.slides,
            )
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

        print(f"\nScanning videos in: {layout.video_dir}")
        scan = service.scan_videos(layout.video_dir, on_progress=print_progress)
        print(scan.summary())

        outcome = service.generate(curriculum, scan.files, layout)

        print("\n=== Summary ===")
        for message in outcome.messages:
            print(message)

        if outcome.unmatched_videos:
            print(f"\nUnmatched local videos ({len(outcome.unmatched_videos)}):")
            for line in outcome.unmatched_video_lines():
                print(f"  {line}")

        if scan.failed:
            print(f"\nDuration errors ({scan.error_count}):")
            for video in scan.failed:
                print(f"  {video.file_name}: {video.error}")

        if args.print_plan:
            print()
            print(outcome.plan.to_json())

        logger.info(
            f"Completed: {outcome.matches.matched_count}/{len(outcome.matches.lessons)} lessons planned"
        )

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\n\nInterrupted by user.")
        sys.exit(130)

    except MissingSlidesError as e:
        logger.error(f"Slide validation failed: {e.message}")
        print(f"\nError: {len(e.missing)} required slide(s) missing in '{e.path}':")
        for name in e.displayed:
            print(f"  {name}")
        print("Add them and run again. No Master Plan was written.")
        sys.exit(1)

    except CoursePlannerError as e:
        logger.error(f"Planning error: {e}")
        print(f"\nError: {e}")
        sys.exit(1)

    except Exception as e:
        log_exception(logger, e, "Unexpected error")
        print(f"\nUnexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
