from src.approval_workflow.approval_workflow.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run()
