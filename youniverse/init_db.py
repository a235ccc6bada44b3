from youniverse.database import Base, engine
import youniverse.models  # registers every model on Base.metadata

def main():
    Base.metadata.create_all(bind=engine)
    print("✅ Tables created successfully")

if __name__ == "__main__":
    main()
