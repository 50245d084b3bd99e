"""Console entry point: ``warp-calendar [--max-warp N] [--warp-days N]``."""
import os
import sys


def main():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'warp_site.settings.base')
    from django.core.management import execute_from_command_line
    execute_from_command_line(['warp-calendar', 'warp_calendar', *sys.argv[1:]])


if __name__ == '__main__':
    main()
