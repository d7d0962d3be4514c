from model_chain.cli import main

raise SystemExit(main())
