"""
Run the Label Print Service: python -m label_print_service
"""

from .app import main

if __name__ == '__main__':
    main()
