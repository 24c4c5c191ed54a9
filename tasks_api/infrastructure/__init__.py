"""Infrastructure: Firestore client, repositories, store exceptions."""
