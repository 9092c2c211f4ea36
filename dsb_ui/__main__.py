from dsb_ui.cli import main

main()
