from easy_cfhighlander.cli import main

raise SystemExit(main())
